"""Coffee shop domain."""
