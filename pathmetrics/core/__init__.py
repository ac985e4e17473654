"""Analysis core."""
