[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gdlab"
version = "0.1.0"
description = "Gradient descent optimizers and small regression models in plain Python"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "gradient descent",
    "optimization",
    "adam",
    "rmsprop",
    "adagrad",
    "nesterov",
    "armijo",
    "logistic regression",
    "softmax",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gdlab = "gdlab.demos:main"

[tool.hatch.build.targets.wheel]
packages = ["gdlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
