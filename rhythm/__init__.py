"""
Daily Rhythm - daily/weekly rollover engine and time-blocked schedule.
"""

__version__ = "0.1.0"
