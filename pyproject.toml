[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vfox"
version = "0.1.0"
description = "Building blocks of an SDK version manager: configuration, a file cache, environment and PATH handling, checksums, plugin hook data and Lua-style table conversion."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "version-manager",
    "sdk",
    "environment",
    "path",
    "plugins",
    "configuration",
    "lua",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Installation/Setup",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vfox"]

[tool.hatch.build.targets.sdist]
include = [
    "vfox",
    "tests",
    "pyproject.toml",
]

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
