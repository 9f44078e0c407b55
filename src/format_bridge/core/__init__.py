"""Configuration and the host-side lint/fix loop."""
