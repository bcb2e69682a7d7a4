[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "calcemu"
version = "0.1.0"
description = "Core timing, locking and debugger state for a scientific-calculator emulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["emulator", "calculator", "debugger", "breakpoints", "watchpoints"]
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
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["calcemu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
