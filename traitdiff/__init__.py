"""traitdiff - extract and compare RPC service trait declarations."""

__version__ = "0.1.0"
