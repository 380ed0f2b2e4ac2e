"""Application layer: permission resolution and authorization services."""
