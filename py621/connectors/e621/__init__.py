"""e621 / e926 connector."""
