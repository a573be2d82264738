"""Configuration — settings, TOML discovery, logging."""
