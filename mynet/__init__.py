"""MyNet.tn access-and-caching service."""
