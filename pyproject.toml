[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tomlemit"
version = "0.1.0"
description = "Serialize Python values, dataclasses and mappings into TOML documents"
requires-python = ">=3.11"
dependencies = []
keywords = ["toml", "serialization", "encoder", "configuration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: File Formats",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tomlemit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
