"""Connectors for concrete API deployments."""
