[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xengine_apps"
version = "0.1.0"
description = "Command-line utilities: numbered file renaming, a TCP/UDP socket tester, and JSON text helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["rename", "files", "sort", "socket", "tcp", "udp", "json", "utf-8"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xengine-filesort = "xengine_apps.filesort:main"
xengine-sockettest = "xengine_apps.sockettest:main"

[tool.hatch.build.targets.wheel]
packages = ["xengine_apps"]

[tool.pytest.ini_options]
addopts = "-ra"
