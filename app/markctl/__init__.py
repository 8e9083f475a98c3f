"""markctl - Stage files and run shell commands across them as a batch."""

__version__ = "0.1.0"

__all__ = ["__version__"]
