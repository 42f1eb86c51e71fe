"""Messages reporting the outcome of proof generation."""

from __future__ import annotations

from dataclasses import dataclass

from zkidentity.utilities import serialize


@dataclass
class ZkpProofResultDto:
    identity_id: str
    proof_reference: str
    schema: str

    def serialize(self) -> bytes:
        return serialize(self)


@dataclass
class ZkpProofFailureDto:
    identity_id: str
    schema: str
    request_body: bytes = b""
    error: str = ""

    def serialize(self) -> bytes:
        return serialize(self)