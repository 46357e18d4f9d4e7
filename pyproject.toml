[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apigen"
version = "0.1.0"
description = "Building blocks for OpenAPI code generation: JSON Schema parsing, JSON Pointer resolution and JSON format codecs."
requires-python = ">=3.10"
dependencies = []
keywords = ["openapi", "json-schema", "json-pointer", "code-generation", "rfc6901"]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["apigen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
