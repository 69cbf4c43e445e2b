"""Demo tenants, users and searchable content for local runs."""
