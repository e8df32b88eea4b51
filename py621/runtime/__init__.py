"""Runtime layers: REST transport and pagination."""
