import json

from zkidentity.rabbitmq_config import (
    ConsumerAlias,
    PublisherAlias,
    RabbitmqConfigJson,
    RabbitmqConsumerConfig,
    RabbitmqConsumerConfigJson,
    RabbitmqPublishersConfig,
    RabbitmqPublishersConfigJson,
)
from zkidentity.utilities import read_config


def test_config_convert_to_domain():
    password = "password"
    config = RabbitmqConfigJson(
        user="testuser",
        password=password,
        publishers_config=[
            RabbitmqPublishersConfigJson(
                publisher_alias="test-publisher",
                exchange="test-exchange",
                routing_key="test-key",
            )
        ],
        consumers_config=[
            RabbitmqConsumerConfigJson(
                consumer_alias="test-consumer",
                consumer_tag="test-tag",
                queue_name="test-queue",
            )
        ],
    )
    result = config.convert_to_domain()
    assert result.user == "testuser"
    assert result.password == password
    assert len(result.publishers_config) == 1
    assert len(result.consumers_config) == 1


def test_publishers_config_convert_to_domain():
    config = RabbitmqPublishersConfigJson(
        publisher_alias="test-publisher",
        exchange="test-exchange",
        routing_key="test-routing-key",
    )
    result = config.convert_to_domain()
    assert result.publisher_alias == "test-publisher"
    assert result.exchange == "test-exchange"
    assert result.routing_key == "test-routing-key"


def test_consumer_config_convert_to_domain():
    config = RabbitmqConsumerConfigJson(
        consumer_alias="test-consumer",
        consumer_tag="test-tag",
        queue_name="test-queue",
    )
    result = config.convert_to_domain()
    assert result.consumer_alias == "test-consumer"
    assert result.consumer_tag == "test-tag"
    assert result.queue_name == "test-queue"


def test_alias_values_are_strings():
    assert str(ConsumerAlias("test-consumer")) == "test-consumer"
    assert PublisherAlias("another-publisher") == "another-publisher"


def test_domain_struct_fields():
    publisher = RabbitmqPublishersConfig(PublisherAlias("test"), "exchange", "key")
    consumer = RabbitmqConsumerConfig(ConsumerAlias("test"), "tag", "queue")
    assert (publisher.publisher_alias, publisher.exchange, publisher.routing_key) == (
        "test",
        "exchange",
        "key",
    )
    assert (consumer.consumer_alias, consumer.consumer_tag, consumer.queue_name) == (
        "test",
        "tag",
        "queue",
    )


def test_array_conversion_keeps_order():
    config = RabbitmqConfigJson(
        user="user",
        password="",
        publishers_config=[
            RabbitmqPublishersConfigJson("pub1", "exchange1", "key1"),
            RabbitmqPublishersConfigJson("pub2", "exchange2", "key2"),
        ],
        consumers_config=[
            RabbitmqConsumerConfigJson("cons1", "tag1", "queue1"),
            RabbitmqConsumerConfigJson("cons2", "tag2", "queue2"),
        ],
    )
    result = config.convert_to_domain()
    assert [p.publisher_alias for p in result.publishers_config] == ["pub1", "pub2"]
    assert [c.consumer_alias for c in result.consumers_config] == ["cons1", "cons2"]
    assert result.consumers_config[1].queue_name == "queue2"


def test_from_json_reads_nested_lists():
    data = {
        "user": "user",
        "password": "password",
        "publishers": [
            {"publisher_alias": "pub", "exchange": "ex", "routing_key": "rk"}
        ],
        "consumers": [
            {"consumer_alias": "cons", "consumer_tag": "tag", "queue_name": "queue"}
        ],
    }
    result = RabbitmqConfigJson.from_json(data).convert_to_domain()
    assert result.user == "user"
    assert result.publishers_config == [RabbitmqPublishersConfig("pub", "ex", "rk")]
    assert result.consumers_config == [RabbitmqConsumerConfig("cons", "tag", "queue")]


def test_from_json_missing_fields_default_to_empty():
    result = RabbitmqConfigJson.from_json({}).convert_to_domain()
    assert result.user == ""
    assert result.password == ""
    assert result.publishers_config == []
    assert result.consumers_config == []


def test_read_config_from_file(tmp_path):
    path = tmp_path / "rabbit.json"
    path.write_text(
        json.dumps(
            {
                "user": "user",
                "consumers": [
                    {"consumer_alias": "a", "consumer_tag": "t", "queue_name": "q"}
                ],
            }
        )
    )
    result = read_config(path, RabbitmqConfigJson)
    assert result.user == "user"
    assert result.consumers_config[0].queue_name == "q"