"""Core - domain types and the error hierarchy. No I/O."""
