"""Commerce Testing site tools — sub-path hosting, navigation and lint."""

__version__ = "0.1.0"
