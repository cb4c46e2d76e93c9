[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tnjnotes"
version = "0.1.15"
description = "Tasks, notes and journal entries in notebooks, stored in a local SQLite database"
requires-python = ">=3.11"
keywords = ["tasks", "notes", "journal", "notebooks", "cli", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: News/Diary",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tnj = "tnjnotes.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tnjnotes"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
