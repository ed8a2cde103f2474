"""Infrastructure layer for BoardFlow: observability, stubs, and adapters."""
