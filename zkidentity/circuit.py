"""The age constraint proven about an identity, and the messages that carry its inputs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from typing import Any

# Scalar field of the BN254 curve; circuit values are elements of this field.
FIELD_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)

MINIMUM_AGE = 18


class ConstraintViolation(ValueError):
    """Raised when circuit inputs do not satisfy the constraints."""


def _element(value: int) -> int:
    return value % FIELD_MODULUS


def _assert_le(left: int, right: int, what: str) -> None:
    if _element(left) > _element(right):
        raise ConstraintViolation(f"{what}: {left} > {right}")


def _equal(left: int, right: int) -> bool:
    return _element(left - right) == 0


@dataclass
class ZkpCircuitBase:
    day: int
    month: int
    year: int


@dataclass
class IdentityCircuit:
    """Secret birth date that must lie at least eighteen years before today."""

    age_day: int
    age_month: int
    age_year: int

    def check(self, today: date | None = None) -> None:
        """Raise :class:`ConstraintViolation` unless the constraints hold on ``today``."""
        today = today or date.today()
        min_valid_year = today.year - MINIMUM_AGE

        _assert_le(self.age_year, min_valid_year, "year after latest valid year")
        year_is_min_valid = _equal(self.age_year, min_valid_year)

        _assert_le(1, self.age_month, "month below 1")
        _assert_le(self.age_month, 12, "month above 12")
        _assert_le(
            self.age_month,
            today.month if year_is_min_valid else 12,
            "month after latest valid month",
        )
        month_is_current = _equal(self.age_month, today.month)

        _assert_le(1, self.age_day, "day below 1")
        _assert_le(self.age_day, 31, "day above 31")
        _assert_le(
            self.age_day,
            today.day if year_is_min_valid and month_is_current else 31,
            "day after latest valid day",
        )

    def is_satisfied(self, today: date | None = None) -> bool:
        try:
            self.check(today)
        except ConstraintViolation:
            return False
        return True


def _load_object(data: Any) -> dict[str, Any]:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    if isinstance(data, str):
        data = json.loads(data)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


def _get(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, kind) and not isinstance(value, bool):
        return value
    raise ValueError(f"field {key!r} must be of type {kind.__name__}")


@dataclass
class ZkpVerifiedPositiveDto:
    identity_id: str = ""
    day: int = 0
    month: int = 0
    year: int = 0
    schema: str = ""

    @classmethod
    def from_json(cls, data: Any) -> ZkpVerifiedPositiveDto:
        """Build from JSON text, bytes or a decoded object; raises ValueError."""
        obj = _load_object(data)
        return cls(
            identity_id=_get(obj, "identity_id", str, ""),
            day=_get(obj, "day", int, 0),
            month=_get(obj, "month", int, 0),
            year=_get(obj, "year", int, 0),
            schema=_get(obj, "schema", str, ""),
        )

    def map_to_circuit_base(self) -> ZkpCircuitBase:
        return ZkpCircuitBase(day=self.day, month=self.month, year=self.year)


@dataclass
class ZkpVerifiedNegativeDto:
    identity_id: str = ""
    schema: str = ""
    reason: str = ""

    @classmethod
    def from_json(cls, data: Any) -> ZkpVerifiedNegativeDto:
        """Build from JSON text, bytes or a decoded object; raises ValueError."""
        obj = _load_object(data)
        return cls(
            identity_id=_get(obj, "identity_id", str, ""),
            schema=_get(obj, "schema", str, ""),
            reason=_get(obj, "reason", str, ""),
        )