[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vectess"
version = "0.1.0"
description = "Vector path flattening, fill and stroke tessellation, glyph atlas packing and shader uniform packing for 2D rendering"
requires-python = ">=3.10"
keywords = ["vector graphics", "tessellation", "stroke", "path", "atlas", "rendering"]
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
    "Topic :: Multimedia :: Graphics",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vectess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
