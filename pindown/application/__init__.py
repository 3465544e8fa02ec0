"""Application layer: DTOs, interfaces (ports) and services."""
