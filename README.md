# zkidentity

Building blocks for an identity service that records zero-knowledge proofs
of age. It covers:

- a JSON logger with levels, bound fields and a process-wide default
  (`zkidentity.logger`)
- configuration loading and small helpers (`zkidentity.utilities`,
  `zkidentity.rabbitmq_config`, `zkidentity.app_config`,
  `zkidentity.blockchain_config`)
- messages describing proof outcomes (`zkidentity.dto`)
- RabbitMQ publishers and consumers kept in named registries
  (`zkidentity.messaging`, `zkidentity.queues`)
- the identity API: data models, SQLite storage, Flask view functions and
  request hooks (`zkidentity.models`, `zkidentity.database`,
  `zkidentity.identity`, `zkidentity.middleware`)
- handling of proof results that arrive on a queue
  (`zkidentity.zkp_results`)
- the age-over-18 circuit rules and the messages carrying birth dates
  (`zkidentity.circuit`)
- a command-line client for the HTTP API (`zkidentity.cli`)

## Installation

```
pip install zkidentity
```

For the test suite:

```
pip install "zkidentity[test]"
pytest
```

## Logging

```python
from zkidentity import logger

log = logger.new()
log.info("service started")
log.info("loaded %d schemas", 3)
log.error(ValueError("bad input"), "request failed")
```

Each entry is one JSON line with `level`, `time`, `caller` and `message`
fields; the error, when given, appears under `error`. `with_level` filters
out entries below a `Level`, `with_output` sends entries to another stream
and `bind(**fields)` returns a copy that adds fields to every line.
`fatal` logs and exits with status 1; `panic` logs and raises
`LoggerPanic`.

`new_from_config(LoggerConfig(...))` builds a logger at the configured
level (info when `Level.NO_LEVEL` is given) with Unix timestamps.

A process-wide logger is set up once with
`init_default_logger(GlobalLoggerConfig(args=[...]))` and fetched with
`default()`. Calling `default()` before it is set up raises `RuntimeError`.

## Configuration

`utilities.read_config(path, config_type)` reads a JSON file, builds
`config_type` from it with `from_json` and returns the result of its
`convert_to_domain()`. A missing file or invalid JSON raises.

A blockchain client configuration file looks like this:

```json
{
  "logger": {"log_level": 1},
  "rabbitmq": {
    "user": "user",
    "password": "password",
    "publishers": [
      {"publisher_alias": "zkp-results", "exchange": "zkp", "routing_key": "results"}
    ],
    "consumers": [
      {"consumer_alias": "zkp-requests", "consumer_tag": "blockchain-client", "queue_name": "zkp-requests"}
    ]
  }
}
```

`blockchain_config.BlockchainClientConfigJson` reads the whole file above;
`rabbitmq_config.RabbitmqConfigJson` reads the `rabbitmq` part;
`app_config.ApiConfigJson` reads the `logger` part.

`utilities.serialize(content)` encodes values, dataclasses included, as
compact UTF-8 JSON (bytes become base64 strings).

## Messaging

`messaging.connect_to_rabbitmq(user, password)` connects to the broker on
host `rabbitmq`, port 5672, making up to seven attempts with growing waits
between them, and raises the last error if all fail.
`initialize_publisher_registry` and `initialize_consumer_registry` open one
channel per configured alias; `get_publisher(alias)` and
`get_consumer(alias)` look them up and raise `RegistryNotInitializedError`
before the registry is set up. `RabbitmqPublisher.publish(body)` sends a
persistent JSON message; `RabbitmqConsumer.start_consuming(handler)` passes
each message body to `handler`.

`queues.RabbitPublisher.connect(amqp_url, exchange, queue, routing_key)`
declares a durable direct exchange and queue, binds them, and publishes
verification requests with `publish_zkp_verification_request`.
`queues.RabbitConsumer.start_consume(handler)` runs the consume loop in a
background thread.

## Identity API

`database.connect_to_database(path)` opens a SQLite database and creates
the `identities`, `verified_schemas` and `zero_knowledge_proofs` tables.

`identity.build(db, rabbit)` wires repository, service and handler;
`identity.register_identity_routes(blueprint, handler)` mounts on a Flask
blueprint with a URL prefix:

| Method | Path              | Purpose                                                      |
|--------|-------------------|--------------------------------------------------------------|
| POST   | prefix            | create an identity (`identity_name`, optional `parent_id`)   |
| GET    | prefix`/<id>`     | fetch an identity by its public id                           |
| POST   | prefix`/verify`   | queue a proof verification request (`identity_id`, `schema`) |

`middleware.internal_auth_middleware()` and
`middleware.public_auth_middleware()` return functions suitable for
`before_request`: the internal one answers 401 when the `Authorization`
header is missing or differs from `middleware.INTERNAL_AUTH_TOKEN`; the
public one lets every request through.

`app_config.initialize_dev(db)` makes sure an `admin` identity and an
"Age greater than 18" schema exist, and returns both.

Proof results coming back from the queue are handled by
`zkp_results.ZeroKnowledgeProofHandler` (see `zkp_results.build`): valid
proofs are stored against the identity and its schema, invalid ones are
logged and dropped.

## Age circuit

`circuit.IdentityCircuit` holds a birth day, month and year and checks that
the holder is at least 18 on a given date:

```python
import datetime
from zkidentity.circuit import IdentityCircuit

birth = IdentityCircuit(15, 7, 1990)
birth.is_satisfied(datetime.date(2025, 1, 1))   # True
birth.check(datetime.date(2000, 1, 1))          # raises ConstraintViolation
```

`ZkpVerifiedPositiveDto.from_json(...)` reads a message carrying a birth
date; `map_to_circuit_base()` turns it into a `ZkpCircuitBase`.

## Command-line client

`zkidentity-cli` talks to a running API at `http://localhost:9000`, or at
the address in the `API_BASE` environment variable.

```
zkidentity-cli create -name alice
zkidentity-cli get -id <identity-id>
zkidentity-cli verify -id <identity-id> -schema <schema>
```

It prints the request line, the response status and the response body.

## What this package does not do

- It does not generate or verify cryptographic proofs: `circuit` checks
  the age rules on plain values only.
- It does not load Solana keypairs or talk to a blockchain.
- It has no ready-made server command: you create the Flask app, register
  the blueprint and hooks, and run it yourself.