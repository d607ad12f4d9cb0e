"""Collect a GitHub user's repositories and their open issues as JSON."""

__version__ = "0.1.0"
