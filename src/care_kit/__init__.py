"""Care Kit: daily affirmation and stress-rating study service."""

__version__ = "0.1.0"
