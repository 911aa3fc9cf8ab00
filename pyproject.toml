[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seabattle"
version = "0.1.0"
description = "A console sea battle game against the computer, with special abilities and save files"
requires-python = ">=3.10"
dependencies = []
keywords = ["battleship", "sea battle", "game", "console", "board game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
seabattle = "seabattle.game:main"

[tool.hatch.build.targets.wheel]
packages = ["seabattle"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
