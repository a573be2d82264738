"""msgrules — the rules of unit testing for messages between objects."""

__version__ = "0.1.0"
