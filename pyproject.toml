[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tp0"
version = "0.1.0"
description = "A minimal TCP client and server that exchange length-prefixed messages and packages of values"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "socket", "client", "server", "serialization", "protocol"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tp0-client = "tp0.client:main"
tp0-server = "tp0.server:main"

[tool.hatch.build.targets.wheel]
packages = ["tp0"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
