import json

import pytest

from zkidentity.blockchain_config import BlockchainClientConfigJson
from zkidentity.logger import Level
from zkidentity.utilities import read_config

CONFIG = {
    "logger": {"log_level": 2},
    "rabbitmq": {
        "user": "user",
        "password": "password",
        "publishers": [
            {"publisher_alias": "pub1", "exchange": "exchange1", "routing_key": "key1"}
        ],
        "consumers": [
            {"consumer_alias": "cons1", "consumer_tag": "tag1", "queue_name": "queue1"},
            {"consumer_alias": "cons2", "consumer_tag": "tag2", "queue_name": "queue2"},
        ],
    },
}


def test_from_json_and_convert():
    result = BlockchainClientConfigJson.from_json(CONFIG).convert_to_domain()
    assert result.logger_conf.log_level == Level(CONFIG["logger"]["log_level"])
    assert result.rabbitmq_conf.user == CONFIG["rabbitmq"]["user"]
    assert result.rabbitmq_conf.password == CONFIG["rabbitmq"]["password"]
    assert len(result.rabbitmq_conf.publishers_config) == 1
    assert [c.queue_name for c in result.rabbitmq_conf.consumers_config] == ["queue1", "queue2"]


def test_publisher_fields_carried_over():
    result = BlockchainClientConfigJson.from_json(CONFIG).convert_to_domain()
    publisher = result.rabbitmq_conf.publishers_config[0]
    assert publisher.publisher_alias == "pub1"
    assert publisher.exchange == "exchange1"
    assert publisher.routing_key == "key1"


def test_empty_config_defaults():
    result = BlockchainClientConfigJson.from_json({}).convert_to_domain()
    assert result.logger_conf.log_level == Level(0)
    assert result.rabbitmq_conf.publishers_config == []
    assert result.rabbitmq_conf.consumers_config == []


def test_read_config_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(CONFIG))
    result = read_config(path, BlockchainClientConfigJson)
    expected = BlockchainClientConfigJson.from_json(CONFIG).convert_to_domain()
    assert result == expected


def test_read_config_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{ invalid json")
    with pytest.raises(ValueError):
        read_config(path, BlockchainClientConfigJson)