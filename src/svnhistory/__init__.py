"""svnhistory — read-only access to normalized Subversion revision history."""

__version__ = "0.1.0"
