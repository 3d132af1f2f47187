[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "marketplace"
version = "0.1.0"
description = "A small marketplace service for sellers and products, with a JSON HTTP API over a SQL database."
requires-python = ">=3.10"
keywords = ["marketplace", "domain-driven design", "rest", "flask", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: Flask",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask>=2.2",
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
marketplace = "marketplace.app:main"

[tool.hatch.build.targets.wheel]
packages = ["marketplace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
