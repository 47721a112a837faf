[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "abscan"
version = "0.1.0"
description = "Data model and storage services for scanning decentralised exchange pairs, tokens and swaps on an EVM chain"
requires-python = ">=3.10"
keywords = ["blockchain", "evm", "dex", "uniswap", "scanner", "tokens", "pairs", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Database",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["abscan"]

[tool.pytest.ini_options]
addopts = "-ra"
