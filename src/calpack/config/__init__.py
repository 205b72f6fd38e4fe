"""Configuration: settings discovery, TOML models and logging setup."""
