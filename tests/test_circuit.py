import json
from datetime import date

import pytest

from zkidentity.circuit import (
    ConstraintViolation,
    IdentityCircuit,
    ZkpCircuitBase,
    ZkpVerifiedNegativeDto,
    ZkpVerifiedPositiveDto,
)

TODAY = date(2025, 7, 15)


def test_over_18():
    assert IdentityCircuit(15, 7, 1990).is_satisfied() is True


def test_exactly_18_today():
    now = date.today()
    assert IdentityCircuit(now.day, now.month, now.year - 18).is_satisfied() is True


def test_under_18():
    now = date.today()
    assert IdentityCircuit(15, 7, now.year - 10).is_satisfied() is False


@pytest.mark.parametrize(
    "day, month, year, expected",
    [
        (29, 2, 1992, True),
        (1, 1, 2030, False),
        (1, 1, 1900, True),
        (31, 12, 2000, True),
        (1, 1, 2000, True),
    ],
)
def test_edge_cases(day, month, year, expected):
    assert IdentityCircuit(day, month, year).is_satisfied() is expected


def test_exactly_18_and_one_year_short():
    now = date.today()
    assert IdentityCircuit(now.day, now.month, now.year - 18).is_satisfied(now) is True
    assert IdentityCircuit(now.day, now.month, now.year - 17).is_satisfied(now) is False


@pytest.mark.parametrize(
    "day, month, year",
    [
        (0, 1, 1990),
        (-5, 1, 1990),
        (32, 1, 1990),
        (15, 0, 1990),
        (15, -1, 1990),
        (15, 13, 1990),
        (15, 1, -1990),
    ],
)
def test_invalid_inputs_rejected(day, month, year):
    circuit = IdentityCircuit(day, month, year)
    with pytest.raises(ConstraintViolation):
        circuit.check(TODAY)


def test_year_zero_is_accepted_by_circuit():
    assert IdentityCircuit(15, 1, 0).is_satisfied(TODAY) is True


@pytest.mark.parametrize(
    "birth, expected",
    [
        (date(2007, 7, 15), True),
        (date(2007, 7, 16), False),
        (date(2007, 6, 30), True),
        (date(2007, 8, 1), False),
        (date(2006, 12, 31), True),
    ],
)
def test_boundary_around_threshold(birth, expected):
    circuit = IdentityCircuit(birth.day, birth.month, birth.year)
    assert circuit.is_satisfied(TODAY) is expected


def test_is_satisfied_matches_check():
    circuit = IdentityCircuit(16, 7, 2007)
    assert circuit.is_satisfied(TODAY) is False
    with pytest.raises(ConstraintViolation):
        circuit.check(TODAY)


def test_positive_dto_maps_to_circuit_base():
    payload = {"identity_id": "abc", "day": 15, "month": 7, "year": 1990, "schema": "age"}
    dto = ZkpVerifiedPositiveDto.from_json(json.dumps(payload))
    assert dto.identity_id == "abc"
    assert dto.schema == "age"
    assert dto.map_to_circuit_base() == ZkpCircuitBase(day=15, month=7, year=1990)


def test_positive_dto_from_bytes_and_missing_fields():
    dto = ZkpVerifiedPositiveDto.from_json(b'{"identity_id": "x"}')
    assert dto == ZkpVerifiedPositiveDto(identity_id="x")


def test_positive_dto_rejects_wrong_type():
    with pytest.raises(ValueError):
        ZkpVerifiedPositiveDto.from_json({"day": "fifteen"})


def test_positive_dto_rejects_invalid_json():
    with pytest.raises(ValueError):
        ZkpVerifiedPositiveDto.from_json('{"invalid": json}')


def test_negative_dto_from_json():
    payload = {"identity_id": "abc", "schema": "age", "reason": "too young"}
    dto = ZkpVerifiedNegativeDto.from_json(payload)
    assert dto == ZkpVerifiedNegativeDto(identity_id="abc", schema="age", reason="too young")


def test_negative_dto_rejects_non_object():
    with pytest.raises(ValueError):
        ZkpVerifiedNegativeDto.from_json("[1, 2]")