"""clockface: current time, timezone conversion and date differences over HTTP."""

__version__ = "0.2.0"
