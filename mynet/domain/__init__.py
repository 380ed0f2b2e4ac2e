"""Domain layer: roles, permissions and domain exceptions (no framework imports)."""
