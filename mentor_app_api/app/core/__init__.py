"""Core infrastructure: configuration, logging, database, identifiers and errors."""
