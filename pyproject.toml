[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "valik"
version = "1.0.0"
description = "Building blocks for local alignment search between DNA sequences: banded extension, X-drop splitting, match ordering and option validation."
requires-python = ">=3.10"
dependencies = []
keywords = ["bioinformatics", "alignment", "dna", "local-alignment", "epsilon-match", "bloom-filter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["valik"]

[tool.pytest.ini_options]
addopts = "-ra"
