"""Configuration: fpfixer.toml discovery, settings, and logging setup."""
