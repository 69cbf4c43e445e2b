"""Adapters - storage and search backends behind the core protocols."""
