"""Application layer: use cases and their wiring."""
