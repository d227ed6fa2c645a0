"""Shared infrastructure: configuration and security."""
