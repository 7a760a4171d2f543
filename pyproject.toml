[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bountyboard"
version = "0.1.0"
description = "A small HTTP service for posting, claiming and approving task bounties on an in-memory ledger"
requires-python = ">=3.10"
keywords = ["bounty", "tasks", "http", "ledger", "bech32", "escrow"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "cryptography",
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bountyboard = "bountyboard.server:main"

[tool.hatch.build.targets.wheel]
packages = ["bountyboard"]

[tool.pytest.ini_options]
addopts = "-ra"
