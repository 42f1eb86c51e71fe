"""Settings of the blockchain client as read from JSON and as used at runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from zkidentity.logger import LoggerConfig, LoggerConfigJson
from zkidentity.rabbitmq_config import RabbitmqConfig, RabbitmqConfigJson


@dataclass
class BlockchainClientConfig:
    logger_conf: LoggerConfig
    rabbitmq_conf: RabbitmqConfig


@dataclass
class BlockchainClientConfigJson:
    logger_conf: LoggerConfigJson = field(default_factory=LoggerConfigJson)
    rabbitmq_conf: RabbitmqConfigJson = field(default_factory=RabbitmqConfigJson)

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> BlockchainClientConfigJson:
        data = data or {}
        return cls(
            logger_conf=LoggerConfigJson.from_json(data.get("logger")),
            rabbitmq_conf=RabbitmqConfigJson.from_json(data.get("rabbitmq")),
        )

    def convert_to_domain(self) -> BlockchainClientConfig:
        return BlockchainClientConfig(
            logger_conf=self.logger_conf.convert_to_domain(),
            rabbitmq_conf=self.rabbitmq_conf.convert_to_domain(),
        )