"""MongoDB repositories using motor.

Users live in one collection keyed by id and indexed by ``orgId``.
Organizations live in their own collection. Natural keys (user email,
organization name) are compared case-insensitively through a strength-2
collation, and a partial unique index over live records backs the
service-level uniqueness checks.
"""

from __future__ import annotations

from typing import Any

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collation import Collation
from pymongo.errors import DuplicateKeyError

from tenantkit.adapters.store.ids import ORGANIZATION_ID_PREFIX, USER_ID_PREFIX, new_id
from tenantkit.config import MongoSettings
from tenantkit.core.errors import ConflictError
from tenantkit.core.types import Organization, User, utc_now

logger = structlog.get_logger()

CASE_INSENSITIVE = Collation(locale="en", strength=2)
LIVE = {"isDeleted": False}

# Fields an update never rewrites.
_IMMUTABLE_FIELDS = {"id", "version", "createdAt", "createdBy", "isDeleted", "deletedAt"}


def _to_document(record: User | Organization) -> dict[str, Any]:
    document = record.model_dump(by_alias=True)
    document["_id"] = record.id
    return document


def _changes(record: User | Organization) -> dict[str, Any]:
    document = record.model_dump(by_alias=True)
    changes = {k: v for k, v in document.items() if k not in _IMMUTABLE_FIELDS}
    changes["modifiedAt"] = utc_now()
    return changes


def _strip_id(document: dict[str, Any]) -> dict[str, Any]:
    document.pop("_id", None)
    return document


class MongoStore:
    """Owns the motor client and hands out collections."""

    def __init__(self, settings: MongoSettings) -> None:
        self._settings = settings
        self._client: AsyncIOMotorClient | None = None
        self._db: Any = None

    async def connect(self) -> None:
        """Open the client and make sure indexes exist."""
        self._client = AsyncIOMotorClient(
            self._settings.uri,
            serverSelectionTimeoutMS=30000,
            tz_aware=True,
        )
        self._db = self._client[self._settings.database]
        await self._client.admin.command("ping")
        await self.ensure_indexes()
        logger.info("mongo_connected", database=self._settings.database)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self._db[self._settings.users_collection]

    @property
    def organizations(self) -> AsyncIOMotorCollection:
        return self._db[self._settings.organizations_collection]

    async def ensure_indexes(self) -> None:
        await self.users.create_index(
            [("email", ASCENDING)],
            name="uniq_live_email",
            unique=True,
            collation=CASE_INSENSITIVE,
            partialFilterExpression=LIVE,
        )
        await self.users.create_index(
            [("orgId", ASCENDING), ("createdAt", DESCENDING)], name="org_created"
        )
        await self.organizations.create_index(
            [("name", ASCENDING)],
            name="uniq_live_name",
            unique=True,
            collation=CASE_INSENSITIVE,
            partialFilterExpression=LIVE,
        )


class MongoUserRepository:
    """User repository backed by a MongoDB collection."""

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._collection = collection

    async def _page(self, query: dict[str, Any], page: int, page_size: int) -> list[User]:
        cursor = (
            self._collection.find(query)
            .sort("createdAt", DESCENDING)
            .skip((page - 1) * page_size)
            .limit(page_size)
        )
        documents = await cursor.to_list(length=page_size)
        return [User.model_validate(_strip_id(d)) for d in documents]

    async def get_by_id(self, user_id: str) -> User | None:
        document = await self._collection.find_one({"_id": user_id, **LIVE})
        return User.model_validate(_strip_id(document)) if document else None

    async def get_by_email(self, email: str) -> User | None:
        document = await self._collection.find_one(
            {"email": email.strip(), **LIVE}, collation=CASE_INSENSITIVE
        )
        return User.model_validate(_strip_id(document)) if document else None

    async def list(self, page: int, page_size: int) -> list[User]:
        return await self._page(dict(LIVE), page, page_size)

    async def list_by_org(self, org_id: str, page: int, page_size: int) -> list[User]:
        return await self._page({"orgId": org_id, **LIVE}, page, page_size)

    async def count(self) -> int:
        return await self._collection.count_documents(dict(LIVE))

    async def count_by_org(self, org_id: str) -> int:
        return await self._collection.count_documents({"orgId": org_id, **LIVE})

    async def create(self, user: User) -> User:
        stored = user.model_copy(deep=True)
        now = utc_now()
        stored.id = stored.id or new_id(USER_ID_PREFIX)
        stored.created_at = now
        stored.modified_at = now
        stored.version = 1
        stored.is_deleted = False
        stored.deleted_at = None
        try:
            await self._collection.insert_one(_to_document(stored))
        except DuplicateKeyError:
            raise ConflictError(f"A user with email '{stored.email}' already exists") from None
        return stored

    async def update(self, user: User) -> User | None:
        try:
            document = await self._collection.find_one_and_update(
                {"_id": user.id, **LIVE},
                {"$set": _changes(user), "$inc": {"version": 1}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise ConflictError(f"A user with email '{user.email}' already exists") from None
        return User.model_validate(_strip_id(document)) if document else None

    async def soft_delete(self, user_id: str, deleted_by: str) -> bool:
        now = utc_now()
        document = await self._collection.find_one_and_update(
            {"_id": user_id, **LIVE},
            {
                "$set": {
                    "isDeleted": True,
                    "deletedAt": now,
                    "modifiedAt": now,
                    "modifiedBy": deleted_by,
                },
                "$inc": {"version": 1},
            },
        )
        return document is not None

    async def exists_by_email(self, email: str, exclude_id: str | None = None) -> bool:
        query: dict[str, Any] = {"email": email.strip(), **LIVE}
        if exclude_id:
            query["_id"] = {"$ne": exclude_id}
        return (
            await self._collection.count_documents(query, limit=1, collation=CASE_INSENSITIVE)
            > 0
        )


class MongoOrganizationRepository:
    """Organization repository backed by a MongoDB collection."""

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._collection = collection

    async def get_by_id(self, org_id: str) -> Organization | None:
        document = await self._collection.find_one({"_id": org_id, **LIVE})
        return Organization.model_validate(_strip_id(document)) if document else None

    async def list(self, page: int, page_size: int) -> list[Organization]:
        cursor = (
            self._collection.find(dict(LIVE))
            .sort("createdAt", DESCENDING)
            .skip((page - 1) * page_size)
            .limit(page_size)
        )
        documents = await cursor.to_list(length=page_size)
        return [Organization.model_validate(_strip_id(d)) for d in documents]

    async def count(self) -> int:
        return await self._collection.count_documents(dict(LIVE))

    async def create(self, organization: Organization) -> Organization:
        stored = organization.model_copy(deep=True)
        now = utc_now()
        stored.id = stored.id or new_id(ORGANIZATION_ID_PREFIX)
        stored.org_id = stored.id
        stored.created_at = now
        stored.modified_at = now
        stored.version = 1
        stored.is_deleted = False
        stored.deleted_at = None
        try:
            await self._collection.insert_one(_to_document(stored))
        except DuplicateKeyError:
            raise ConflictError(
                f"An organization with name '{stored.name}' already exists"
            ) from None
        return stored

    async def update(self, organization: Organization) -> Organization | None:
        changes = _changes(organization)
        changes.pop("orgId", None)
        try:
            document = await self._collection.find_one_and_update(
                {"_id": organization.id, **LIVE},
                {"$set": changes, "$inc": {"version": 1}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise ConflictError(
                f"An organization with name '{organization.name}' already exists"
            ) from None
        return Organization.model_validate(_strip_id(document)) if document else None

    async def soft_delete(self, org_id: str, deleted_by: str) -> bool:
        now = utc_now()
        document = await self._collection.find_one_and_update(
            {"_id": org_id, **LIVE},
            {
                "$set": {
                    "isDeleted": True,
                    "deletedAt": now,
                    "modifiedAt": now,
                    "modifiedBy": deleted_by,
                },
                "$inc": {"version": 1},
            },
        )
        return document is not None

    async def exists_by_name(self, name: str, exclude_id: str | None = None) -> bool:
        query: dict[str, Any] = {"name": name.strip(), **LIVE}
        if exclude_id:
            query["_id"] = {"$ne": exclude_id}
        return (
            await self._collection.count_documents(query, limit=1, collation=CASE_INSENSITIVE)
            > 0
        )
