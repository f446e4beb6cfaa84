[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qrsymbol"
version = "0.1.0"
description = "QR Code specification tables, Reed-Solomon error correction and input data encoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["qr", "qrcode", "barcode", "reed-solomon", "structured-append"]
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
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["qrsymbol"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
