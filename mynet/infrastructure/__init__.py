"""Infrastructure: cache stores and token security."""
