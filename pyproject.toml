[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gomagw"
version = "0.1.0"
description = "Address validation, CORS, middleware, RSA key and health-check building blocks for an API gateway"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
    "cryptography",
]
keywords = [
    "api-gateway",
    "reverse-proxy",
    "cors",
    "health-check",
    "middleware",
    "rsa",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gomagw"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
