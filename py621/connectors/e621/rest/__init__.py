"""e621 REST endpoints."""
