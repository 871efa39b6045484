[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphcanvas"
version = "0.26.0"
description = "Interactive graph visualization model: nodes, edges, layouts, navigation and drawable shapes"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "visualization", "node-graph", "layout", "widget"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["graphcanvas"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
