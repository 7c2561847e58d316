"""Test suite for Gipfelkreuzer.

Test organization:
- fixtures/: Mock peak generators and test utilities
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/
    pytest tests/ -v --tb=short
"""
