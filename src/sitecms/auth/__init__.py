"""Admin authentication (JWT bearer tokens)."""
