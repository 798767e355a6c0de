"""
Journal Engine - Trading Performance Simulation & Analytics

Pure, stateless analytics for a trading journal: Monte Carlo resampling of
daily results, capital trajectory replay with ruin detection, streak and
recovery statistics, and a historical vs current-month slot classifier.
"""

__version__ = "0.1.0"
__author__ = "Journal Engine Team"
