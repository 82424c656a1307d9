[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stunkit"
version = "0.1.0"
description = "Networking and utility building blocks for STUN clients and servers"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["stun", "nat", "networking", "sockets", "polling", "rate-limiting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["stunkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
