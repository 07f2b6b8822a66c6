"""Application layer: commands, queries, handlers and services."""
