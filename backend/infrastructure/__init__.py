"""Infrastructure layer: persistence, notifications, configuration."""
