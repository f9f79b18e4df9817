[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lteinfo"
version = "0.1.0"
description = "Live terminal status display for LTE modems driven over an AT command port"
requires-python = ">=3.10"
dependencies = []
keywords = ["lte", "modem", "at-commands", "monitoring", "huawei", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lteinfo = "lteinfo.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lteinfo"]

[tool.pytest.ini_options]
addopts = "-ra"
