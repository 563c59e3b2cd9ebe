"""MoodFlow: a mood journal with a REST API and a local CLI."""

__version__ = "0.1.0"
