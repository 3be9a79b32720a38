[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taglog"
version = "0.1.0"
description = "Tag based logging with named loggers, per-tag levels, replay buffers and pluggable appenders"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "tags", "appender", "rolling-file", "syslog", "replay"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["taglog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
