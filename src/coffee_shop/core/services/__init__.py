"""Core services: document store gateway, catalog operations and seed loading."""
