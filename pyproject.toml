[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adtsrds"
version = "0.1.0"
description = "Extract RDS data carried in AAC ADTS frames and predict the next channel to tune"
requires-python = ">=3.10"
dependencies = []
keywords = ["aac", "adts", "rds", "bitstream", "huffman", "tuning"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["adtsrds"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
