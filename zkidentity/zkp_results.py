"""Storing the outcome of proof verifications received from the results queue."""

from __future__ import annotations

import sqlite3
import uuid
from typing import Any

from zkidentity import logger
from zkidentity.database import RecordNotFoundError
from zkidentity.models import (
    Identity,
    VerifiedSchema,
    ZeroKnowledgeProof,
    ZeroKnowledgeProofVerificationResponse,
)


class ZkpRepository:
    """Database access for identities, verified schemas and proofs."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def get_identity_by_uuid(self, identity_uuid: str) -> Identity:
        """Return the identity with public id ``identity_uuid``."""
        row = self._db.execute(
            "SELECT id, identity_id, identity_name, parent_id FROM identities "
            "WHERE identity_id = ? ORDER BY id LIMIT 1",
            (identity_uuid,),
        ).fetchone()
        if row is None:
            raise RecordNotFoundError("record not found")
        return Identity(
            id=row[0], identity_id=row[1], identity_name=row[2], parent_id=row[3]
        )

    def find_or_create_verified_schema(
        self, schema_str: str, super_identity_id: int
    ) -> VerifiedSchema:
        """Return the schema stored with text ``schema_str``, creating it if absent."""
        row = self._db.execute(
            "SELECT id, schema_id, super_identity_id, schema FROM verified_schemas "
            "WHERE schema = ? ORDER BY id LIMIT 1",
            (schema_str,),
        ).fetchone()
        if row is not None:
            return VerifiedSchema(
                id=row[0], schema_id=row[1], super_identity_id=row[2], schema=row[3]
            )

        schema = VerifiedSchema(
            schema_id=str(uuid.uuid4()),
            super_identity_id=super_identity_id,
            schema=schema_str,
        )
        with self._db:
            cursor = self._db.execute(
                "INSERT INTO verified_schemas (schema_id, super_identity_id, schema) "
                "VALUES (?, ?, ?)",
                (schema.schema_id, schema.super_identity_id, schema.schema),
            )
        schema.id = cursor.lastrowid
        return schema

    def save_zero_knowledge_proof(self, proof: ZeroKnowledgeProof) -> None:
        """Insert ``proof`` and set its generated ``id``."""
        with self._db:
            cursor = self._db.execute(
                "INSERT INTO zero_knowledge_proofs "
                "(digital_identity_schema_id, super_identity_id, proof_reference) "
                "VALUES (?, ?, ?)",
                (
                    proof.digital_identity_schema_id,
                    proof.super_identity_id,
                    proof.proof_reference,
                ),
            )
        proof.id = cursor.lastrowid


class ZkpService:
    """Records valid verification results."""

    def __init__(self, repo: ZkpRepository) -> None:
        self.repo = repo

    def process_verification_result(
        self, response: ZeroKnowledgeProofVerificationResponse
    ) -> None:
        """Save a proof for a valid result; invalid results are only logged.

        A missing identity raises :class:`RecordNotFoundError`; database
        errors propagate.
        """
        log = logger.default()
        if not response.is_proof_valid:
            log.warn(
                "Invalid proof, not saving: %s (error: %s)",
                response.identity_id,
                response.error,
            )
            return

        identity = self.repo.get_identity_by_uuid(response.identity_id)
        schema = self.repo.find_or_create_verified_schema(response.schema, identity.id)
        proof = ZeroKnowledgeProof(
            digital_identity_schema_id=schema.id,
            super_identity_id=identity.id,
            proof_reference=response.proof_reference,
        )
        self.repo.save_zero_knowledge_proof(proof)
        log.info(
            "Saved ZKP proof for identity: %s, schema: %s",
            response.identity_id,
            schema.schema_id,
        )


class ZeroKnowledgeProofHandler:
    """Feeds messages from the results queue to the service."""

    def __init__(self, service: ZkpService, consumer: Any) -> None:
        self.service = service
        self.consumer = consumer
        self._listen()

    def _listen(self) -> None:
        log = logger.default()
        try:
            self.consumer.start_consume(self.handle_delivery)
        except Exception as exc:
            log.error(exc, "Failed to register result queue consumer")
        log.info("Listening for ZKP verification results...")

    def handle_delivery(self, body: bytes) -> None:
        """Decode one result message and process it, logging any failure."""
        log = logger.default()
        try:
            response = ZeroKnowledgeProofVerificationResponse.from_json(body)
        except ValueError as exc:
            log.error(exc, "Failed to unmarshal result")
            return

        try:
            self.service.process_verification_result(response)
        except (RecordNotFoundError, sqlite3.Error) as exc:
            log.error(exc, "Failed to process verification result")
            return

        log.info("Processed ZKP verification result for identity: %s", response.identity_id)
        log.info(
            "ZKP Verification Result: identity_id=%s | is_proof_valid=%s | "
            "proof_reference=%s | schema=%s | error=%s",
            response.identity_id,
            "true" if response.is_proof_valid else "false",
            response.proof_reference,
            response.schema,
            response.error,
        )


def build(db: sqlite3.Connection, consumer: Any) -> ZeroKnowledgeProofHandler:
    """Wire repository, service and handler, and start listening."""
    return ZeroKnowledgeProofHandler(ZkpService(ZkpRepository(db)), consumer)