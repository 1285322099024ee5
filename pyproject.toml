[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pairbacktest"
version = "0.1.0"
description = "Typed column loading of OHLC price data from CSV files, with a small block profiler and repetition tester."
requires-python = ">=3.10"
dependencies = []
keywords = ["backtest", "pair trading", "csv", "ohlc", "profiling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pairbacktest = "pairbacktest.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pairbacktest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
