"""Domain apps of the facility booking service."""
