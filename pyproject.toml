[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hacfg"
version = "0.1.0"
description = "Line parsers that read and write HAProxy configuration directives"
requires-python = ">=3.10"
dependencies = []
keywords = ["haproxy", "configuration", "parser", "load-balancer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hacfg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
