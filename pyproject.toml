[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tfplansummary"
version = "0.1.0"
description = "Summarise Terraform/Terragrunt JSON plan files as readable tables"
requires-python = ">=3.10"
keywords = ["terraform", "terragrunt", "plan", "summary", "infrastructure"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]
dependencies = [
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tf-plan-summary = "tfplansummary.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tfplansummary"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
