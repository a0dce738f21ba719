[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rarhunter"
version = "0.1.0"
description = "Find directories holding complete, not yet extracted RAR sets and extract them with unrar."
requires-python = ">=3.10"
dependencies = []
keywords = ["rar", "unrar", "sfv", "archive", "extract"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rar-hunter = "rarhunter.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rarhunter"]

[tool.pytest.ini_options]
addopts = "-ra"
