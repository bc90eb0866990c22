[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eventviz"
version = "0.1.0"
description = "Timed visual events driven by breakpoint envelopes and parameter mappers, drawn to a recording canvas"
requires-python = ">=3.10"
dependencies = []
keywords = ["visuals", "envelope", "animation", "generative", "noise", "mesh"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["eventviz"]

[tool.pytest.ini_options]
addopts = "-ra"
