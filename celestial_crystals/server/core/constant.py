"""Project-wide constants for the storefront server."""

PROJECT_NAME = "CELESTIAL Crystals"
API_V1_STR = "/api/v1"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "v1"
