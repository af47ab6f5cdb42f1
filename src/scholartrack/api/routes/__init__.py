"""Page and action routes."""
