[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "armstrong"
version = "0.11.0"
description = "Generate azapi Terraform test configurations from Azure REST API examples and report on plans, states, logs and errors"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "azure",
    "terraform",
    "azapi",
    "rest-api",
    "testing",
    "hcl",
    "json-diff",
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
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["armstrong"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
