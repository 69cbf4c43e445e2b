"""Application settings loaded from environment.

Each section is a plain settings class that reads its values once at
construction time. Components receive the section they need through their
constructor rather than reading the environment themselves.
"""

from __future__ import annotations

import os

PLATFORM_ORG_ID = "PLATFORM"


def _split(value: str, sep: str = ",") -> list[str]:
    """Split a delimited environment value, dropping blank entries."""
    return [part.strip() for part in value.split(sep) if part.strip()]


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class PasswordSettings:
    """Credential hashing parameters."""

    def __init__(
        self,
        secret_key: str | None = None,
        iterations: int | None = None,
        salt_size: int | None = None,
        hash_size: int | None = None,
    ) -> None:
        """Load password settings, explicit arguments take precedence over the environment."""
        self.secret_key = (
            secret_key if secret_key is not None else os.getenv("PASSWORD_SECRET_KEY", "")
        )
        self.iterations = iterations or int(os.getenv("PASSWORD_ITERATIONS", "100000"))
        self.salt_size = salt_size or int(os.getenv("PASSWORD_SALT_SIZE", "16"))
        self.hash_size = hash_size or int(os.getenv("PASSWORD_HASH_SIZE", "32"))


class JwtSettings:
    """Bearer token signing parameters."""

    def __init__(
        self,
        secret_key: str | None = None,
        issuer: str | None = None,
        audience: str | None = None,
        expiration_minutes: int | None = None,
    ) -> None:
        """Load JWT settings, explicit arguments take precedence over the environment."""
        self.secret_key = secret_key or os.getenv(
            "JWT_SECRET_KEY", "dev-secret-change-in-production-0123456789"
        )
        self.issuer = issuer or os.getenv("JWT_ISSUER", "tenantkit")
        self.audience = audience or os.getenv("JWT_AUDIENCE", "tenantkit-api")
        self.expiration_minutes = expiration_minutes or int(
            os.getenv("JWT_EXPIRATION_MINUTES", "60")
        )
        self.algorithm = "HS256"


class MongoSettings:
    """Document store connection settings."""

    def __init__(self) -> None:
        """Load document store settings from environment variables."""
        self.uri = os.getenv("MONGODB_URI", "")
        self.database = os.getenv("MONGODB_DATABASE", "")
        self.users_collection = os.getenv("MONGODB_USERS_COLLECTION", "users")
        self.organizations_collection = os.getenv(
            "MONGODB_ORGANIZATIONS_COLLECTION", "organizations"
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.uri and self.database)


class SearchFieldMap:
    """Maps index document fields onto searchable item attributes.

    Attributes with several candidates are resolved in order, first
    non-empty value wins.
    """

    def __init__(self) -> None:
        """Load the field mapping from environment variables."""
        self.id = _split(os.getenv("SEARCH_FIELD_ID", "chunk_id,id"))
        self.title = _split(os.getenv("SEARCH_FIELD_TITLE", "title"))
        self.content = _split(os.getenv("SEARCH_FIELD_CONTENT", "chunk"))
        self.category = _split(os.getenv("SEARCH_FIELD_CATEGORY", "source"))
        self.type = _split(os.getenv("SEARCH_FIELD_TYPE", "text_source,source"))
        self.url = _split(os.getenv("SEARCH_FIELD_URL", "sourceUrl"))
        self.image_url = _split(os.getenv("SEARCH_FIELD_IMAGE_URL", "imageUrl"))
        self.tags = _split(os.getenv("SEARCH_FIELD_TAGS", "keywords"))
        self.active = _split(os.getenv("SEARCH_FIELD_ACTIVE", "commercial_safe"))
        self.created_at = _split(os.getenv("SEARCH_FIELD_CREATED_AT", "createdAt"))
        self.modified_at = _split(os.getenv("SEARCH_FIELD_MODIFIED_AT", "modifiedAt"))
        self.metadata = _split(
            os.getenv(
                "SEARCH_FIELD_METADATA",
                "pmcid,pmid,year,source,text_source,blobUrl,blobName,containerName",
            )
        )
        self.list_metadata = _split(os.getenv("SEARCH_FIELD_LIST_METADATA", "authors"))


class SearchIndexSettings:
    """External hybrid search index settings."""

    def __init__(self) -> None:
        """Load search index settings from environment variables."""
        self.endpoint = os.getenv("SEARCH_ENDPOINT", "")
        self.api_key = os.getenv("SEARCH_API_KEY", "")
        self.index_name = os.getenv("SEARCH_INDEX_NAME", "")
        self.filter_fields = _split(os.getenv("SEARCH_FILTER_FIELDS", ""))
        # Filter expressions may contain commas
        self.default_filters = _split(os.getenv("SEARCH_DEFAULT_FILTERS", ""), ";")
        self.facet_fields = _split(os.getenv("SEARCH_FACET_FIELDS", ""))
        self.facet_count = int(os.getenv("SEARCH_FACET_COUNT", "10"))
        self.select_fields = _split(os.getenv("SEARCH_SELECT_FIELDS", ""))
        self.vector_search_enabled = _flag("SEARCH_VECTOR_ENABLED")
        self.vector_field = os.getenv("SEARCH_VECTOR_FIELD", "chunkVector")
        self.vector_k = int(os.getenv("SEARCH_VECTOR_K", "5"))
        self.fields = SearchFieldMap()

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key and self.index_name)


class Settings:
    """Application settings loaded from environment."""

    def __init__(self) -> None:
        """Load settings from environment variables."""
        self.app_env = os.getenv("APP_ENV", "development").lower()
        self.demo_mode = _flag("DEMO_MODE", "true")
        self.password = PasswordSettings()
        self.jwt = JwtSettings()
        self.mongo = MongoSettings()
        self.search = SearchIndexSettings()

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"
