"""Building blocks of the HTTP service."""
