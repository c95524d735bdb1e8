[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trashdoctor"
version = "0.1.0"
description = "Find old and oversized files, then delete, archive or trash them with rule-based filters"
requires-python = ">=3.10"
dependencies = []
keywords = ["disk", "cleanup", "files", "archive", "trash", "hygiene"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
trashdoctor = "trashdoctor.app:main"

[tool.hatch.build.targets.wheel]
packages = ["trashdoctor"]

[tool.pytest.ini_options]
addopts = "-ra"
