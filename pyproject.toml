[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sentpres"
version = "1.0.0"
description = "Plain text presentation tool: one idea per slide, drawn as large as the window allows"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["presentation", "slides", "plain text", "farbfeld", "viewer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Presentation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sentpres = "sentpres.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sentpres"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
