"""Core building blocks: exception hierarchy and request context."""
