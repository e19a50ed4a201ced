[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rulefilter"
version = "0.1.0"
description = "Comparison, membership, IP-range, version and pattern operations for rule-based data filtering"
requires-python = ">=3.10"
dependencies = []
keywords = ["filter", "rules", "operations", "comparison", "ip-range", "version"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rulefilter"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
