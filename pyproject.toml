[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schemamodel"
version = "0.1.0"
description = "Read JSON Schemas, build simplified type models from them and generate Protocol Buffer descriptions."
requires-python = ">=3.10"
keywords = ["json-schema", "openapi", "protobuf", "code-generation", "type-model"]
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
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
schemamodel-generate = "schemamodel.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["schemamodel"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
