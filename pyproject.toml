[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labnet"
version = "0.1.0"
description = "An LRU response cache, robust socket I/O, an adder CGI program and a tiny job-control shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["cache", "lru", "cgi", "shell", "job control", "buffered io"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: CGI Tools/Libraries",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
labnet-adder = "labnet.adder:main"
labnet-tsh = "labnet.shell:main"
labnet-myspin = "labnet.testprogs:myspin_main"
labnet-myint = "labnet.testprogs:myint_main"
labnet-mysplit = "labnet.testprogs:mysplit_main"
labnet-mystop = "labnet.testprogs:mystop_main"

[tool.hatch.build.targets.wheel]
packages = ["labnet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
