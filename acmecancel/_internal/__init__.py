"""acmecancel internal modules."""
