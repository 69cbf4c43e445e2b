"""Core domain - business rules independent of storage and transport."""
