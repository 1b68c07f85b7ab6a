"""acmecancel tests."""
