"""Validation of the result payloads exchanged with the journal UI."""
