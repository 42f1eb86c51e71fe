[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zkidentity"
version = "0.1.0"
description = "Identity service building blocks: SQLite storage, a Flask blueprint, RabbitMQ messaging, age-proof rules and an API test client"
requires-python = ">=3.10"
dependencies = [
    "flask",
    "pika",
]
keywords = [
    "identity",
    "zero-knowledge",
    "zkp",
    "rabbitmq",
    "amqp",
    "flask",
    "sqlite",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Security",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
zkidentity-cli = "zkidentity.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["zkidentity"]

[tool.hatch.build.targets.sdist]
include = [
    "zkidentity",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
