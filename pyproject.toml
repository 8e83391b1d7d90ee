[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ngebut"
version = "0.1.0"
description = "Building blocks for an HTTP server: request parsing, response writing, routing, caching, storage and logging"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "parser", "router", "radix", "logging", "cache", "storage"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ngebut"]

[tool.pytest.ini_options]
addopts = "-ra"
