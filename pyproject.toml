[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ttylink"
version = "0.1.0"
description = "Open, configure and talk to serial devices through the POSIX terminal interface."
requires-python = ">=3.10"
dependencies = []
keywords = ["serial", "tty", "uart", "termios", "rs232", "modem lines"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ttylink"]

[tool.pytest.ini_options]
addopts = "-ra"
