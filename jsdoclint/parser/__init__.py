"""JavaScript parser."""
