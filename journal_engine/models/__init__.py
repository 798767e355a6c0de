"""
Result models module.

Immutable value objects returned by the analytics components. Each one
serializes to the camelCase payload the journal's UI consumes.
"""
