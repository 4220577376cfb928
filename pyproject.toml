[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tics"
version = "0.3.1"
description = "A small file-based version control tool for CAD models and engineering data"
requires-python = ">=3.10"
dependencies = []
keywords = ["version-control", "cad", "stl", "vcs", "engineering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tics = "tics.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
