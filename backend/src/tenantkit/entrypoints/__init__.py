"""Entrypoints - transports exposing the core services."""
