"""Domain types for media restoration."""
