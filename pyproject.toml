[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pdfcanvas"
version = "0.1.0"
description = "Low-level building blocks for writing PDF documents: object encoding, streams, content streams, paths, arcs, colours and annotations."
requires-python = ">=3.10"
dependencies = []
keywords = ["pdf", "vector graphics", "content stream", "bezier", "arc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Printing",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pdfcanvas"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
