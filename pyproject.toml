[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aurionshell"
version = "1.0.0"
description = "A DOS/Unix-style command shell over a small sector-based filesystem image"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "filesystem", "disk-image", "command-line", "dos"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aurionshell = "aurionshell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["aurionshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
