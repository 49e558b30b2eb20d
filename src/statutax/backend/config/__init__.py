"""Configuration models, loading, and validation."""
