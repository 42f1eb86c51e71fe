"""Identity storage, business rules and HTTP endpoints."""

from __future__ import annotations

import json
import sqlite3
import uuid
from http import HTTPStatus
from typing import Any

from flask import jsonify, request

from zkidentity.database import RecordNotFoundError
from zkidentity.models import Identity, ZeroKnowledgeProofVerificationRequest

_COLUMNS = "id, identity_id, identity_name, parent_id"


def _to_identity(row: Any) -> Identity:
    row_id, identity_id, identity_name, parent_id = row
    return Identity(
        id=row_id, identity_id=identity_id, identity_name=identity_name, parent_id=parent_id
    )


class IdentityRepository:
    """Reads and writes identities in the database."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create(self, identity: Identity) -> None:
        """Insert ``identity`` and set its generated ``id``."""
        with self._db:
            if identity.id:
                cursor = self._db.execute(
                    f"INSERT INTO identities ({_COLUMNS}) VALUES (?, ?, ?, ?)",
                    (identity.id, identity.identity_id, identity.identity_name, identity.parent_id),
                )
            else:
                cursor = self._db.execute(
                    "INSERT INTO identities (identity_id, identity_name, parent_id) VALUES (?, ?, ?)",
                    (identity.identity_id, identity.identity_name, identity.parent_id),
                )
        identity.id = cursor.lastrowid

    def _first(self, column: str, value: Any) -> Identity:
        row = self._db.execute(
            f"SELECT {_COLUMNS} FROM identities WHERE {column} = ? ORDER BY id LIMIT 1",
            (value,),
        ).fetchone()
        if row is None:
            raise RecordNotFoundError("record not found")
        return _to_identity(row)

    def get_by_id(self, identity_id: str) -> Identity:
        """Return the identity with public id ``identity_id``."""
        return self._first("identity_id", identity_id)

    def get_by_name(self, name: str) -> Identity:
        return self._first("identity_name", name)

    def get_sub_identities(self, parent_id: int) -> list[Identity]:
        rows = self._db.execute(
            f"SELECT {_COLUMNS} FROM identities WHERE parent_id = ? ORDER BY id", (parent_id,)
        ).fetchall()
        return [_to_identity(row) for row in rows]


class IdentityService:
    """Creates identities and queues verification requests."""

    def __init__(self, repo: IdentityRepository, rabbit: Any) -> None:
        self.repo = repo
        self.rabbit = rabbit

    def create_identity(self, name: str, parent_id: int | None = None) -> Identity:
        """Create an identity with a fresh UUID.

        The parent is looked up by public id, using the decimal form of
        ``parent_id``; a missing parent raises :class:`RecordNotFoundError`.
        """
        if parent_id is not None:
            try:
                self.repo.get_by_id(str(parent_id))
            except RecordNotFoundError:
                raise RecordNotFoundError(
                    f"parent identity with Id {parent_id} does not exist"
                ) from None

        identity = Identity(identity_id=str(uuid.uuid4()), identity_name=name, parent_id=parent_id)
        self.repo.create(identity)
        return identity

    def get_identity_by_id(self, identity_id: str) -> Identity:
        return self.repo.get_by_id(identity_id)

    def queue_verification(self, request: ZeroKnowledgeProofVerificationRequest) -> None:
        self.rabbit.publish_zkp_verification_request(request)


def _error(message: str, status: HTTPStatus) -> tuple[Any, HTTPStatus]:
    return jsonify({"error": message}), status


class IdentityHandler:
    """Flask view functions for the identity endpoints."""

    def __init__(self, service: IdentityService) -> None:
        self.service = service

    def create_identity(self) -> tuple[Any, HTTPStatus]:
        try:
            payload = json.loads(request.get_data() or b"")
        except ValueError:
            return _error("Invalid request", HTTPStatus.BAD_REQUEST)
        if not isinstance(payload, dict):
            return _error("Invalid request", HTTPStatus.BAD_REQUEST)
        name = payload.get("identity_name")
        parent_id = payload.get("parent_id")
        if name is not None and not isinstance(name, str):
            return _error("Invalid request", HTTPStatus.BAD_REQUEST)
        if parent_id is not None and (not isinstance(parent_id, int) or isinstance(parent_id, bool)):
            return _error("Invalid request", HTTPStatus.BAD_REQUEST)
        if not name:
            return _error("Invalid request", HTTPStatus.BAD_REQUEST)

        try:
            identity = self.service.create_identity(name, parent_id)
        except (RecordNotFoundError, sqlite3.Error) as exc:
            return _error(f"Could not create identity: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR)

        return (
            jsonify(
                {
                    "identity_id": identity.identity_id,
                    "identity_name": identity.identity_name,
                    "parent_id": identity.parent_id,
                }
            ),
            HTTPStatus.CREATED,
        )

    def get_identity(self, identity_id: str) -> tuple[Any, HTTPStatus]:
        try:
            identity = self.service.get_identity_by_id(identity_id)
        except RecordNotFoundError:
            return _error("Identity not found", HTTPStatus.NOT_FOUND)
        return (
            jsonify({"identity_id": identity.identity_id, "identity_name": identity.identity_name}),
            HTTPStatus.OK,
        )

    def queue_verification(self) -> tuple[Any, HTTPStatus]:
        try:
            req = ZeroKnowledgeProofVerificationRequest.from_json(request.get_data())
        except ValueError:
            return _error("Invalid JSON", HTTPStatus.BAD_REQUEST)
        try:
            self.service.queue_verification(req)
        except Exception:
            return _error("Failed to queue verification", HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify({"status": "queued"}), HTTPStatus.ACCEPTED


def register_identity_routes(blueprint: Any, handler: IdentityHandler) -> None:
    """Attach the identity endpoints to a blueprint that has a URL prefix."""
    blueprint.add_url_rule("", "create_identity", handler.create_identity, methods=["POST"])
    blueprint.add_url_rule("/<identity_id>", "get_identity", handler.get_identity, methods=["GET"])
    blueprint.add_url_rule(
        "/verify", "queue_verification", handler.queue_verification, methods=["POST"]
    )


def build(db: sqlite3.Connection, rabbit: Any) -> IdentityHandler:
    """Wire repository, service and handler together."""
    return IdentityHandler(IdentityService(IdentityRepository(db), rabbit))