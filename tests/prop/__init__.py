"""
Property-based tests for CHIP-8 arithmetic, memory and timing behaviour.

This package hosts Hypothesis strategies and the test entrypoints for both
the fast CI lane and the nightly fuzz job.
"""
