"""Seed an in-memory store with demo tenants and users.

Every demo user starts with the derived initial password, for example
``john.smith@acme.com`` / ``John Smith`` logs in with ``john_john``.
"""

from __future__ import annotations

from datetime import UTC, datetime

import structlog

from tenantkit.adapters.store.memory import InMemoryStore
from tenantkit.config import PLATFORM_ORG_ID
from tenantkit.core.auth.password import PasswordHasher, generate_derived_password
from tenantkit.core.types import (
    Address,
    Contact,
    Limits,
    Organization,
    Phone,
    Subscription,
    User,
)

logger = structlog.get_logger()

SEED_ACTOR = "system"

DEMO_ORGANIZATIONS = [
    {
        "id": "org_01HABC",
        "name": "Acme Corp",
        "status": "active",
        "email": "ops@acme.com",
        "phone": ("+91", "9876543210"),
        "address": ("12 MG Road", "Near Metro Station", "Bengaluru", "Karnataka", "560001", "IN"),
        "user_limit": 25,
        "created_at": datetime(2025, 12, 24, tzinfo=UTC),
    },
    {
        "id": "org_02XYZD",
        "name": "TechStart Solutions",
        "status": "active",
        "email": "admin@techstart.io",
        "phone": ("+1", "4155551234"),
        "address": ("500 Startup Lane", "Suite 200", "San Francisco", "California", "94107", "US"),
        "user_limit": 50,
        "created_at": datetime(2025, 11, 15, tzinfo=UTC),
    },
    {
        "id": "org_03MNOP",
        "name": "Global Enterprises Ltd",
        "status": "suspended",
        "email": "contact@globalent.co.uk",
        "phone": ("+44", "2079460123"),
        "address": ("100 High Street", None, "London", "Greater London", "EC1A 1BB", "GB"),
        "user_limit": 100,
        "created_at": datetime(2025, 6, 1, tzinfo=UTC),
    },
]

# (id, org id, user type, status, name, email)
DEMO_USERS = [
    ("usr_PLATFORM01", PLATFORM_ORG_ID, "platform_admin", "active", "Platform Admin",
     "admin@tenantkit.io"),
    ("usr_ACME001", "org_01HABC", "org_admin", "active", "John Smith", "john.smith@acme.com"),
    ("usr_ACME002", "org_01HABC", "org_user", "active", "Jane Doe", "jane.doe@acme.com"),
    ("usr_ACME003", "org_01HABC", "org_user", "suspended", "Bob Wilson", "bob.wilson@acme.com"),
    ("usr_TECH001", "org_02XYZD", "org_admin", "active", "Alice Johnson", "alice@techstart.io"),
    ("usr_TECH002", "org_02XYZD", "org_user", "active", "Charlie Brown", "charlie@techstart.io"),
    ("usr_GLOBAL001", "org_03MNOP", "org_admin", "active", "David Chen", "david@globalent.co.uk"),
]


def build_organizations() -> list[Organization]:
    organizations = []
    for entry in DEMO_ORGANIZATIONS:
        country_code, number = entry["phone"]
        line1, line2, city, state, postal_code, country = entry["address"]
        organizations.append(
            Organization(
                id=entry["id"],
                org_id=entry["id"],
                name=entry["name"],
                status=entry["status"],
                contact=Contact(
                    email=entry["email"],
                    phone=Phone(
                        country_code=country_code, number=number, e164=f"{country_code}{number}"
                    ),
                    address=Address(
                        line1=line1,
                        line2=line2,
                        city=city,
                        state=state,
                        postal_code=postal_code,
                        country=country,
                    ),
                ),
                subscription=Subscription(limits=Limits(user_limit=entry["user_limit"])),
                created_at=entry["created_at"],
                created_by=SEED_ACTOR,
                modified_at=entry["created_at"],
                modified_by=SEED_ACTOR,
            )
        )
    return organizations


def build_users(hasher: PasswordHasher) -> list[User]:
    names = {entry["id"]: entry["name"] for entry in DEMO_ORGANIZATIONS}
    names[PLATFORM_ORG_ID] = "Platform"
    return [
        User(
            id=user_id,
            org_id=org_id,
            org_name=names[org_id],
            user_type=user_type,
            role=user_type,
            status=status,
            name=name,
            email=email,
            password_hash=hasher.hash_password(generate_derived_password(email, name)),
            created_by=SEED_ACTOR,
            modified_by=SEED_ACTOR,
        )
        for user_id, org_id, user_type, status, name, email in DEMO_USERS
    ]


def seed_store(store: InMemoryStore, hasher: PasswordHasher) -> None:
    """Load demo organizations and users into an empty store.

    Args:
        store: Store to populate. Existing records are left untouched
            and seeding is skipped if any organization is present.
        hasher: Hasher used for the derived demo passwords.
    """
    if store.organizations:
        logger.info("demo_seed_skipped", reason="store_not_empty")
        return

    store.organizations.extend(build_organizations())
    store.users.extend(build_users(hasher))
    logger.info(
        "demo_data_seeded",
        organizations=len(store.organizations),
        users=len(store.users),
    )
