"""Countdown numbers game solver with a command line and a Discord bot."""

__version__ = "0.1.0"
