"""swipematch: swipe-to-match introduction service."""

__version__ = "0.1.0"
