[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "patternlog"
version = "0.1.0"
description = "Pattern-driven log message formatting with stream, daily-rotating file and syslog sinks"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "formatter", "pattern", "sink", "syslog", "daily rotation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["patternlog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
