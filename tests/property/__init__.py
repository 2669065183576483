"""Property-based tests using Hypothesis.

These tests use generative testing to explore edge cases:
- Image URL filtering with arbitrary candidate lists
- Normalization idempotence on scrape-like text
- Block tree invariants on arbitrary input

To run property tests:
    pytest tests/property/ -v --hypothesis-show-statistics

Requires:
    hypothesis>=6.100.0
"""
