[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockclock"
version = "0.1.0"
description = "Screen layouts for a multi-panel Bitcoin ticker display, plus a self-contained QR Code encoder"
requires-python = ">=3.10"
dependencies = []
keywords = ["bitcoin", "display", "e-paper", "ticker", "qr-code", "lightning"]
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
    "Topic :: Utilities",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blockclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
