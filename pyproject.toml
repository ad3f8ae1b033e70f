[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stagehand"
version = "0.1.0"
description = "Data models and local helpers for AI-driven browser automation: observe, act and extract."
requires-python = ">=3.10"
dependencies = [
    "jsonschema",
]
keywords = ["browser", "automation", "accessibility", "llm", "agent", "extraction"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Browsers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["stagehand"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
