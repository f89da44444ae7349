[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tessella"
version = "0.1.0"
description = "Adaptive tessellation of NURBS curves and surfaces, with range trimming of curves"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["nurbs", "tessellation", "mesh", "geometry", "cad"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tessella"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
