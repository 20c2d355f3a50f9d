[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kittyasm"
version = "0.1.0"
description = "Assembler for the kitty24 virtual machine's assembly language"
requires-python = ">=3.10"
dependencies = []
keywords = ["assembler", "virtual machine", "kitty24", "fantasy console", "machine code"]
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
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kittyasm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
