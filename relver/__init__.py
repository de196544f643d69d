"""Release version state machine."""

__version__ = "0.1.0"
