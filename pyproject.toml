[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stepflow"
version = "1.0.0"
description = "Configurable data-processing pipelines built from pluggable worker modules"
requires-python = ">=3.10"
dependencies = []
keywords = ["pipeline", "workflow", "processing", "fifo", "worker"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stepflow"]

[tool.pytest.ini_options]
addopts = "-ra"
