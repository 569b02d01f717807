[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "olmkit"
version = "0.1.0"
description = "Building blocks for an operator lifecycle manager: operator groups, pod spec overrides, sync tracking, configuration, bundle manifests, catalog image templates and adoptable component kinds"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kubernetes",
    "operators",
    "lifecycle",
    "operator-group",
    "catalog",
    "manifest",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["olmkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
