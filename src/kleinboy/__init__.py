"""kleinboy — CMS on the file system."""

__version__ = "0.3.0"
