[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "obelixirc"
version = "0.1.0"
description = "A small password-protected IRC-style chat server with channels, modes and operators"
requires-python = ">=3.10"
dependencies = []
keywords = ["irc", "chat", "server", "channels"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat :: Internet Relay Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
obelixirc = "obelixirc.server:main"

[tool.hatch.build.targets.wheel]
packages = ["obelixirc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
