[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "foxlib"
version = "0.1.0"
description = "Shared building blocks for FOXDEN data services: query language, record helpers, service payloads and web server plumbing"
requires-python = ">=3.10"
keywords = [
    "foxden",
    "metadata",
    "query-language",
    "dataset-identifier",
    "flask",
    "data-management",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Software Development :: Libraries",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "pymongo",
    "psutil",
    "markdown",
    "flask",
    "jinja2",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["foxlib"]

[tool.hatch.build.targets.sdist]
include = [
    "foxlib",
    "tests",
    "pyproject.toml",
]

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
ignore_missing_imports = true
