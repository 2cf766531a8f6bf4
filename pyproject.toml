[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "thresig"
version = "0.1.0"
description = "Threshold signature scripts over MAST (Merkelized abstract syntax trees) with sr25519 verification"
requires-python = ">=3.10"
dependencies = []
keywords = ["threshold-signature", "mast", "merkle", "taproot", "sr25519", "ristretto", "schnorr", "merlin"]
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
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["thresig"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
