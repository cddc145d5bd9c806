[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orbitui"
version = "0.1.10"
description = "Reactive state, CSS-like styling, camera maths and renderer abstractions for building user interfaces."
requires-python = ">=3.10"
dependencies = []
keywords = ["ui", "reactive", "signals", "css", "styling", "renderer", "camera"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["orbitui"]

[tool.hatch.build.targets.sdist]
include = ["orbitui", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
