"""HTTP API for Care Kit."""
