import base64
import json

from zkidentity.dto import ZkpProofFailureDto, ZkpProofResultDto
from zkidentity.utilities import Serializable


def test_result_dto_fields_round_trip():
    dto = ZkpProofResultDto(identity_id="id-1", proof_reference="ref-9", schema="age")
    decoded = json.loads(dto.serialize())
    assert decoded == {"identity_id": "id-1", "proof_reference": "ref-9", "schema": "age"}


def test_result_dto_key_order():
    dto = ZkpProofResultDto(identity_id="a", proof_reference="b", schema="c")
    assert list(json.loads(dto.serialize())) == ["identity_id", "proof_reference", "schema"]


def test_failure_dto_encodes_body_as_base64():
    body = b'{"identity_id":"x"}'
    dto = ZkpProofFailureDto(identity_id="x", schema="age", request_body=body, error="bad")
    decoded = json.loads(dto.serialize())
    assert base64.b64decode(decoded["request_body"]) == body
    assert decoded["error"] == "bad"
    assert decoded["identity_id"] == "x"
    assert decoded["schema"] == "age"


def test_failure_dto_empty_body():
    dto = ZkpProofFailureDto(identity_id="x", schema="age")
    assert json.loads(dto.serialize())["request_body"] == ""


def test_dtos_are_serializable():
    result = ZkpProofResultDto("a", "b", "c")
    failure = ZkpProofFailureDto("a", "b")
    assert isinstance(result, Serializable)
    assert isinstance(failure, Serializable)
    assert json.loads(result.serialize()) == {
        "identity_id": "a",
        "proof_reference": "b",
        "schema": "c",
    }
    assert json.loads(failure.serialize()) == {
        "identity_id": "a",
        "schema": "b",
        "request_body": "",
        "error": "",
    }