[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vball"
version = "0.1.0"
description = "HTTP backend for a volleyball game: abilities, player loadouts and matchmaking across game servers"
requires-python = ">=3.10"
keywords = ["game", "backend", "matchmaking", "abilities", "flask", "sqlalchemy", "volleyball"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask>=2.3",
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
vball = "vball.app:main"

[tool.hatch.build.targets.wheel]
packages = ["vball"]

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
