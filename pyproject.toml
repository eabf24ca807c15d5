[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "balancekv"
version = "0.1.0"
description = "Segmented append-only key-value store with an HTTP front end and backend report tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "key-value",
    "storage",
    "log-structured",
    "append-only",
    "http",
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
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
balancekv-db = "balancekv.dbserver:main"
balancekv-stats = "balancekv.stats:main"

[tool.hatch.build.targets.wheel]
packages = ["balancekv"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
