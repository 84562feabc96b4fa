"""
Multi-account command-line task tracker.

Tasks and users live in memory and are mirrored to two JSON files after
every successful change.
"""

__version__ = "0.1.0"
