[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tfproto5"
version = "0.1.0"
description = "Terraform plugin protocol 5 type system, values, attribute paths, msgpack encoding and schemas"
requires-python = ">=3.10"
dependencies = [
    "msgpack",
]
keywords = ["terraform", "provider", "plugin", "protocol", "msgpack", "schema"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tfproto5"]

[tool.pytest.ini_options]
addopts = "-ra"
