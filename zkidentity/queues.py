"""Publishing verification requests and consuming results over AMQP."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

import pika

from zkidentity.models import ZeroKnowledgeProofVerificationRequest

_PERSISTENT = 2


class RabbitConsumer:
    """Consumes one queue on its own channel of a connection."""

    def __init__(self, connection: Any, queue_name: str) -> None:
        self.connection = connection
        self.channel = connection.channel()
        self.queue_name = queue_name

    def start_consume(self, handler: Callable[[bytes], None]) -> threading.Thread:
        """Register the consumer and feed message bodies to ``handler`` in a thread.

        Registration errors propagate; the returned thread runs the consume loop.
        """

        def on_message(_channel: Any, _method: Any, _properties: Any, body: bytes) -> None:
            handler(body)

        self.channel.basic_consume(
            queue=self.queue_name,
            on_message_callback=on_message,
            auto_ack=True,
            exclusive=False,
        )
        worker = threading.Thread(target=self.channel.start_consuming, daemon=True)
        worker.start()
        return worker


class RabbitPublisher:
    """Publishes verification requests to a direct exchange."""

    def __init__(
        self, connection: Any, channel: Any, exchange: str, queue: str, routing_key: str
    ) -> None:
        self.connection = connection
        self.channel = channel
        self.exchange = exchange
        self.queue = queue
        self.routing_key = routing_key

    @classmethod
    def connect(cls, amqp_url: str, exchange: str, queue: str, routing_key: str) -> RabbitPublisher:
        """Connect, declare a durable exchange and queue, and bind them."""
        connection = pika.BlockingConnection(pika.URLParameters(amqp_url))
        try:
            channel = connection.channel()
        except Exception:
            connection.close()
            raise
        try:
            channel.exchange_declare(
                exchange=exchange,
                exchange_type="direct",
                durable=True,
                auto_delete=False,
                internal=False,
            )
            channel.queue_declare(queue=queue, durable=True, exclusive=False, auto_delete=False)
            channel.queue_bind(queue=queue, exchange=exchange, routing_key=routing_key)
        except Exception:
            channel.close()
            connection.close()
            raise
        return cls(connection, channel, exchange, queue, routing_key)

    def ensure_results_queue(self, queue_name: str) -> None:
        """Declare a durable queue for results."""
        self.channel.queue_declare(
            queue=queue_name, durable=True, exclusive=False, auto_delete=False
        )

    def publish_zkp_verification_request(
        self, request: ZeroKnowledgeProofVerificationRequest
    ) -> None:
        """Publish ``request`` as a persistent JSON message."""
        body = request.to_json().encode("utf-8")
        properties = pika.BasicProperties(
            content_type="application/json",
            timestamp=int(time.time()),
            delivery_mode=_PERSISTENT,
        )
        self.channel.basic_publish(
            exchange=self.exchange,
            routing_key=self.routing_key,
            body=body,
            properties=properties,
            mandatory=False,
        )

    def close(self) -> None:
        """Close the channel and the connection."""
        self.channel.close()
        self.connection.close()

    def __enter__(self) -> RabbitPublisher:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()