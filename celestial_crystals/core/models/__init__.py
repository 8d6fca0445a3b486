"""Domain enums and API IO schemas."""
