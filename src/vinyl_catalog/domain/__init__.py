"""Domain layer for the vinyl catalog."""
