"""
Prep Scheduler: finds preparation time before the meetings of a day.
"""

__version__ = "1.0.0"
