"""User-facing frontends."""
