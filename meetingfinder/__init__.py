"""
meetingfinder - find the free spans of a day in which a meeting fits.
"""

__version__ = "0.1.0"
