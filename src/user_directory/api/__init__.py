"""HTTP surface of the user directory."""
