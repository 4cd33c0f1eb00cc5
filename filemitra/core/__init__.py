"""Core FileMitra modules."""
