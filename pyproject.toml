[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "starshooter"
version = "0.1.0"
description = "A small vertical space shooter with a starfield, alien waves and explosions, built on pygame."
requires-python = ">=3.10"
keywords = ["game", "shooter", "arcade", "pygame", "space"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
starshooter = "starshooter.game:main"
starshooter-welcome = "starshooter.welcome:main"
starshooter-template = "starshooter.template:main"

[tool.hatch.build.targets.wheel]
packages = ["starshooter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
