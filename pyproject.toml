[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scarasim"
version = "0.1.0"
description = "Kinematics and line-drawing control for a remote SCARA robot simulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["scara", "robot", "kinematics", "simulator", "interpolation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
scarasim = "scarasim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["scarasim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
