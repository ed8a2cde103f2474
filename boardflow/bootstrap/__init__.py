"""Bootstrap wiring: logging, database sessions, and service graph."""
