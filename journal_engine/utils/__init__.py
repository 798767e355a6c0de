"""
Utility functions module.

Reference-date handling for period partitioning and presentation
downsampling shared across the engine.
"""
