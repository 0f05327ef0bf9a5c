[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ralphloop"
version = "1.3.0"
description = "Building blocks for an OpenCode agent loop: argument building, output parsing, loop state files and plugin discovery"
requires-python = ">=3.10"
dependencies = []
keywords = ["opencode", "agent", "loop", "stream-json", "plugins"]
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
    "Topic :: Software Development",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["ralphloop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
