"""League configuration settings."""
