[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flagbase"
version = "0.1.0"
description = "HTTP client for a feature-flag server and an in-memory runtime for testing functions"
requires-python = ">=3.10"
dependencies = []
keywords = ["feature-flags", "sdk", "runtime", "testing", "mock"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Software Development :: Testing :: Mocking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flagbase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
