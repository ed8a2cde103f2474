"""HTTP API for BoardFlow."""
