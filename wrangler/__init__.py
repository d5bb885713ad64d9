"""README polishing pipeline that proposes changes as reviewable patches."""

__version__ = "0.1.0"
