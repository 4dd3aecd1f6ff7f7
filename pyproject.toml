[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sigheaders"
version = "0.1.0"
description = "Parse and validate HTTP Message Signature headers (Signature-Input and Signature)"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "http",
    "signatures",
    "message-signatures",
    "signature-input",
    "structured-fields",
    "parser",
]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Security",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sigheaders"]

[tool.hatch.build.targets.sdist]
include = ["sigheaders", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
