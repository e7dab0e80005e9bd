"""Find files with identical content under a directory tree."""

__version__ = "0.1.0"
