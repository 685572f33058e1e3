[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quotaday"
version = "0.1.0"
description = "A small web server that serves quotations as JSON or HTML"
requires-python = ">=3.10"
dependencies = []
keywords = ["quotes", "quotation", "http", "wsgi", "web server"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
quotaday = "quotaday.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["quotaday"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
