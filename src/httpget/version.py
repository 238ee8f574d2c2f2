"""src/httpget/version.py"""

__version__ = "0.2.0"
