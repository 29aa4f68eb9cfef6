[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rccar"
version = "0.1.0"
description = "Control logic for a small remote-controlled car: PID, ring buffers, motors, LEDs, servo, tone player and ranging sensor"
requires-python = ">=3.10"
dependencies = []
keywords = ["pid", "motor", "ws2812", "servo", "ultrasonic", "robotics", "remote-control"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rccar"]

[tool.pytest.ini_options]
addopts = "-ra"
