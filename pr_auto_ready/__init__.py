"""Watch a pull request's checks and mark it ready for review once they pass."""

__version__ = "0.1.0"
