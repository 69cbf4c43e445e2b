"""tenantkit - multi-tenant organization and user API with scoped search."""

__version__ = "1.0.0"
