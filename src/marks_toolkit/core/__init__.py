"""Core models, schema validation and serialization."""
