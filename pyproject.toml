[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lorawire"
version = "0.1.0"
description = "Encode, decode, sign and encrypt LoRaWAN join frames, identifiers and link-layer payloads"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["lorawan", "lora", "iot", "join-accept", "phypayload", "mic", "aes", "cmac"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lorawire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
