"""
Unit Tests for Chess Opponent

This package contains unit tests for all opponent components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_evaluation.py

    # Run with coverage
    pytest tests/ --cov=chess_opponent --cov-report=html

    # Run specific test
    pytest tests/test_evaluation.py::TestClassicalEvaluator

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
