"""Build tool plugins."""
