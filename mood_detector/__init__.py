"""
Mood Detector - text sentiment to emoji, colour and message.

This package scores free text with a sentiment analyzer, maps the score to a
mood presentation and publishes the resulting state to UI observers, either
in-process or over HTTP and Server-Sent Events.
"""

__version__ = "0.1.0"
