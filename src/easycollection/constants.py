"""Package-wide constants."""

PACKAGE_VERSION = "0.3.0"
SCHEMA_VERSION = "1.0.0"
