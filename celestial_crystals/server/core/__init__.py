"""Core server configuration: settings, constants and request dependencies."""
