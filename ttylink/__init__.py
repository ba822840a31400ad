"""Serial device access through the POSIX terminal interface."""

__version__ = "0.1.0"
__all__ = ["device", "errors", "settings", "timer"]