"""Configuration layer: copy options, settings discovery, and logging."""
