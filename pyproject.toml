[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "physecs"
version = "0.1.0"
description = "Rigid body physics building blocks: bounds, BVH, clipping, contact tests and constraint solving"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["physics", "collision", "rigid body", "bvh", "constraints", "separating axis"]
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
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["physecs"]

[tool.pytest.ini_options]
addopts = "-ra"
