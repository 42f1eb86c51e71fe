"""Identity service building blocks: logging, config, RabbitMQ messaging, SQLite storage, Flask views and age-proof rules."""

__version__ = "0.1.0"