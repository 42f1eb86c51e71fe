"""Identities, verified schemas, proofs and verification messages."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from zkidentity.utilities import serialize


class ComparisonType(str, Enum):
    """How a schema constraint compares a claim with its value."""

    LESS_EQUALS = "le"
    GREATER_THAN = "gt"
    EQUALS = "eq"
    NOT_EQUALS = "not"


@dataclass
class Constraint:
    key: str
    comparison: ComparisonType
    value: Any

    def _as_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "comparison_type": ComparisonType(self.comparison).value,
            "value": self.value,
        }


@dataclass
class Schema:
    constraints: list[Constraint] = field(default_factory=list)

    def to_json(self) -> str:
        """Render the schema as compact JSON text."""
        payload = {"constraints": [c._as_dict() for c in self.constraints]}
        return serialize(payload).decode("utf-8")


@dataclass
class VerifiedSchema:
    id: int = 0
    schema_id: str = ""
    super_identity_id: int = 0
    schema: str = ""


@dataclass
class Identity:
    id: int = 0
    identity_id: str = ""
    identity_name: str = ""
    parent_id: int | None = None
    parent: Identity | None = field(default=None, repr=False, compare=False)
    sub_identities: list[Identity] = field(default_factory=list, repr=False, compare=False)


@dataclass
class ZeroKnowledgeProof:
    id: int = 0
    digital_identity_schema_id: int = 0
    super_identity_id: int = 0
    proof_reference: str = ""


def _load_object(data: Any) -> dict[str, Any]:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    if isinstance(data, str):
        data = json.loads(data)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


def _field(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif isinstance(value, kind) and not isinstance(value, bool):
        return value
    raise ValueError(f"field {key!r} must be of type {kind.__name__}")


@dataclass
class ZeroKnowledgeProofVerificationRequest:
    identity_id: str = ""
    schema: str = ""

    @classmethod
    def from_json(cls, data: Any) -> ZeroKnowledgeProofVerificationRequest:
        """Build from JSON text, bytes or a decoded object; raises ValueError."""
        obj = _load_object(data)
        return cls(
            identity_id=_field(obj, "identity_id", str, ""),
            schema=_field(obj, "schema", str, ""),
        )

    def to_json(self) -> str:
        return serialize({"identity_id": self.identity_id, "schema": self.schema}).decode("utf-8")


@dataclass
class ZeroKnowledgeProofVerificationResponse:
    identity_id: str = ""
    is_proof_valid: bool = False
    proof_reference: str = ""
    schema: str = ""
    error: str = ""

    @classmethod
    def from_json(cls, data: Any) -> ZeroKnowledgeProofVerificationResponse:
        """Build from JSON text, bytes or a decoded object; raises ValueError."""
        obj = _load_object(data)
        return cls(
            identity_id=_field(obj, "identity_id", str, ""),
            is_proof_valid=_field(obj, "is_proof_valid", bool, False),
            proof_reference=_field(obj, "proof_reference", str, ""),
            schema=_field(obj, "schema", str, ""),
            error=_field(obj, "error", str, ""),
        )