[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "authycli"
version = "0.1.0"
description = "Command line TOTP code viewer with fuzzy search and Alfred workflow output"
requires-python = ">=3.10"
dependencies = []
keywords = ["totp", "otp", "2fa", "authenticator", "alfred", "fuzzy-search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
authy = "authycli.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["authycli"]

[tool.pytest.ini_options]
addopts = "-ra"
