"""Repository implementations and factory."""
