"""Core utilities: institution table, error catalog, exceptions, logging."""
