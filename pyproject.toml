[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ginroute"
version = "1.4.0.dev0"
description = "Radix-tree HTTP route matching with path parameters, catch-alls, trailing-slash and case-insensitive lookup"
requires-python = ">=3.10"
dependencies = []
keywords = ["router", "radix-tree", "http", "routing", "url", "path-parameters"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ginroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
