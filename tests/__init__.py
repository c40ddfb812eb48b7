"""Slotwise Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - office/: Intervals, availability, scoring, ranking, insights, providers
  - config/: Scheduling config and logging setup

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/office/

    # With coverage
    pytest --cov=slotwise --cov-report=term-missing
"""
