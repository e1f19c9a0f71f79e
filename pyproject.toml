[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ros2_client"
version = "0.8.1"
description = "ROS 2 names, wire time types, discovery info and a .msg to struct code generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["ros2", "dds", "rtps", "robotics", "msg", "codegen"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
msggen = "ros2_client.msggen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ros2_client"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
