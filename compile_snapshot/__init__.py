"""Snapshot-based harness for compile-pass and compile-fail tests."""
