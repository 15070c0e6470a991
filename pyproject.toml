[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geometries"
version = "0.1.0"
description = "Build, reshape and inspect coordinate geometries held in arrays, matrices, lists and data frames."
requires-python = ">=3.10"
keywords = ["geometry", "gis", "coordinates", "bounding-box", "spatial"]
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
    "Topic :: Scientific/Engineering :: GIS",
]
dependencies = [
    "numpy",
    "pandas",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["geometries"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
