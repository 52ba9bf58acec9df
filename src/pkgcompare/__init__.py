"""Package categorization and comparison scoring."""

__version__ = "0.1.0"
