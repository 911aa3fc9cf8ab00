"""A console sea battle game against the computer, with abilities and save files."""

__version__ = "0.1.0"