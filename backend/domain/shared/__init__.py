"""Shared kernel: domain errors and the Result type."""
