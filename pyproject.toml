[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "warpjobs"
version = "0.1.0"
description = "Job scheduling controller with per-user accounts, rewards, fees and eviction over an in-memory runtime"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduling", "jobs", "keeper", "eviction", "rewards", "simulation"]
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
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["warpjobs"]

[tool.pytest.ini_options]
addopts = "-ra"
