"""API settings and development seed data."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass, field
from typing import Any

from zkidentity import logger
from zkidentity.database import RecordNotFoundError
from zkidentity.identity import IdentityRepository
from zkidentity.logger import LoggerConfig, LoggerConfigJson
from zkidentity.models import ComparisonType, Constraint, Identity, Schema, VerifiedSchema
from zkidentity.zkp_results import ZkpRepository

ADMIN_NAME = "admin"


@dataclass
class ApiConfig:
    logger_conf: LoggerConfig = field(default_factory=LoggerConfig)


@dataclass
class ApiConfigJson:
    logger_conf: LoggerConfigJson = field(default_factory=LoggerConfigJson)

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> ApiConfigJson:
        data = data or {}
        return cls(logger_conf=LoggerConfigJson.from_json(data.get("logger")))

    def convert_to_domain(self) -> ApiConfig:
        return ApiConfig(logger_conf=self.logger_conf.convert_to_domain())


def initialize_dev(db: sqlite3.Connection) -> tuple[Identity, VerifiedSchema]:
    """Ensure an admin identity and an "Age > 18" schema exist.

    Database errors are logged, not raised. Returns the admin and the schema.
    """
    log = logger.default()
    identities = IdentityRepository(db)

    try:
        admin = identities.get_by_name(ADMIN_NAME)
    except RecordNotFoundError:
        admin = Identity(identity_id=str(uuid.uuid4()), identity_name=ADMIN_NAME)
        try:
            identities.create(admin)
        except sqlite3.Error as exc:
            log.error(exc, "Error inserting admin")

    schema = Schema([Constraint(key="Age", comparison=ComparisonType.GREATER_THAN, value=18)])
    serialized = schema.to_json()

    try:
        verified = ZkpRepository(db).find_or_create_verified_schema(serialized, admin.id)
    except sqlite3.Error as exc:
        log.error(exc, "Error when inserting schema")
        verified = VerifiedSchema(super_identity_id=admin.id, schema=serialized)

    log.info("Created admin user with id: %s", admin.identity_id)
    log.info("Created schema with Age constraint: %s", verified.schema_id)
    return admin, verified