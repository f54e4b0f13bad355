"""Feature modules for flock-commons."""
