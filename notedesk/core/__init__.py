"""Core infrastructure: config, logging, database, errors."""
