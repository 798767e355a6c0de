"""
Trade record ingestion module.

Canonical record and aggregate models plus the parsers that turn the
journal's operation rows into records.
"""
