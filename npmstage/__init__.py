"""Release staging for npm packages with per-platform optional dependencies."""

__version__ = "0.1.0"
