"""Application layer: use cases, services and orchestrators."""
