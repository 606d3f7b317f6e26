[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raylab"
version = "0.1.0"
description = "A small ray tracer with Whitted-style shading, a bounding volume hierarchy and an OBJ model loader"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ray tracing",
    "rendering",
    "bvh",
    "whitted",
    "fresnel",
    "obj",
    "ppm",
    "png",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
raylab-bvh = "raylab.render:main"

[tool.hatch.build.targets.wheel]
packages = ["raylab"]

[tool.hatch.build.targets.sdist]
include = ["raylab", "tests", "README.md", "pyproject.toml"]

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
