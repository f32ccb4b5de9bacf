[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blehost"
version = "0.1.0"
description = "Bluetooth Low Energy host building blocks: UUIDs, byte cursors, characteristic properties, advertising data and size configuration"
requires-python = ">=3.10"
dependencies = []
keywords = ["bluetooth", "ble", "uuid", "advertising", "gatt"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blehost"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
