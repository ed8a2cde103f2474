"""Application layer for BoardFlow: ports, DTOs, and orchestrating services."""
