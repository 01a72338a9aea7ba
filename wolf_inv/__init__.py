"""wolf-inv - terminal dashboard for a remote server inventory."""

__version__ = "0.1.0"
