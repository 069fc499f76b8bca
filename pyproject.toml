[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atracdenc"
version = "0.1.0"
description = "Building blocks for ATRAC audio coding: bit streams, FFT, MDCT and the OMA container"
requires-python = ">=3.10"
dependencies = []
keywords = ["atrac", "atrac3", "oma", "mdct", "fft", "audio", "codec", "bitstream"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
omainfo = "atracdenc.omatools:omainfo_main"
omacp = "atracdenc.omatools:omacp_main"

[tool.hatch.build.targets.wheel]
packages = ["atracdenc"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
