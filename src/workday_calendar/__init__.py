"""
Workday calendar service.

Computes deadlines expressed in fractional workdays: a start date/time
moved forward or backward through configured daily work hours, skipping
weekends and holidays. Exposed as a library and as a small Flask API.
"""

__version__ = "1.0.0"
