[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mp4atoms"
version = "0.1.0"
description = "Read and write ISO base media (MP4) boxes: fragment runs, track extends, video and text sample entries"
requires-python = ">=3.10"
dependencies = []
keywords = ["mp4", "isobmff", "atoms", "boxes", "video", "container", "vp9", "fragmented-mp4"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mp4atoms"]

[tool.hatch.build.targets.sdist]
include = ["mp4atoms", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
