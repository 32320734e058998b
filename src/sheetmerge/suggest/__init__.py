"""Schema suggestion service."""
