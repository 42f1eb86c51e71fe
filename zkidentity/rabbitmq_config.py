"""Message-broker settings as read from JSON and as used at runtime."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NewType

from zkidentity.utilities import convert_json_array_to_domain

PublisherAlias = NewType("PublisherAlias", str)
ConsumerAlias = NewType("ConsumerAlias", str)


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


@dataclass
class RabbitmqPublishersConfig:
    publisher_alias: PublisherAlias
    exchange: str
    routing_key: str


@dataclass
class RabbitmqPublishersConfigJson:
    publisher_alias: str = ""
    exchange: str = ""
    routing_key: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> RabbitmqPublishersConfigJson:
        data = data or {}
        return cls(
            publisher_alias=_text(data, "publisher_alias"),
            exchange=_text(data, "exchange"),
            routing_key=_text(data, "routing_key"),
        )

    def convert_to_domain(self) -> RabbitmqPublishersConfig:
        return RabbitmqPublishersConfig(
            publisher_alias=PublisherAlias(self.publisher_alias),
            exchange=self.exchange,
            routing_key=self.routing_key,
        )


@dataclass
class RabbitmqConsumerConfig:
    consumer_alias: ConsumerAlias
    consumer_tag: str
    queue_name: str


@dataclass
class RabbitmqConsumerConfigJson:
    consumer_alias: str = ""
    consumer_tag: str = ""
    queue_name: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> RabbitmqConsumerConfigJson:
        data = data or {}
        return cls(
            consumer_alias=_text(data, "consumer_alias"),
            consumer_tag=_text(data, "consumer_tag"),
            queue_name=_text(data, "queue_name"),
        )

    def convert_to_domain(self) -> RabbitmqConsumerConfig:
        return RabbitmqConsumerConfig(
            consumer_alias=ConsumerAlias(self.consumer_alias),
            consumer_tag=self.consumer_tag,
            queue_name=self.queue_name,
        )


@dataclass
class RabbitmqConfig:
    user: str
    password: str
    publishers_config: list[RabbitmqPublishersConfig] = field(default_factory=list)
    consumers_config: list[RabbitmqConsumerConfig] = field(default_factory=list)


@dataclass
class RabbitmqConfigJson:
    user: str = ""
    password: str = ""
    publishers_config: list[RabbitmqPublishersConfigJson] = field(default_factory=list)
    consumers_config: list[RabbitmqConsumerConfigJson] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> RabbitmqConfigJson:
        data = data or {}
        return cls(
            user=_text(data, "user"),
            password=_text(data, "password"),
            publishers_config=[
                RabbitmqPublishersConfigJson.from_json(item)
                for item in data.get("publishers") or []
            ],
            consumers_config=[
                RabbitmqConsumerConfigJson.from_json(item)
                for item in data.get("consumers") or []
            ],
        )

    def convert_to_domain(self) -> RabbitmqConfig:
        return RabbitmqConfig(
            user=self.user,
            password=self.password,
            publishers_config=convert_json_array_to_domain(self.publishers_config),
            consumers_config=convert_json_array_to_domain(self.consumers_config),
        )