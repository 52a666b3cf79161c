[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmcontrol"
version = "0.1.0"
description = "Building blocks for competition-robot controllers: packet codecs, ballistic solving, RLS estimation, CAN, serial and UDP links"
requires-python = ">=3.10"
keywords = [
    "robotics",
    "robomaster",
    "can-bus",
    "socketcan",
    "ballistics",
    "recursive-least-squares",
    "gimbal",
    "serial",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Typing :: Typed",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rmcontrol"]

[tool.hatch.build.targets.sdist]
include = [
    "rmcontrol",
    "tests",
    "pyproject.toml",
]

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
warn_unused_ignores = true
warn_redundant_casts = true
