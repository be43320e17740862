[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mgbench"
version = "0.1.0"
description = "A multigrid V-cycle benchmark on a periodic 3-D grid, with small timing programs"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["benchmark", "multigrid", "numerical", "poisson", "delannoy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mgbench = "mgbench.benchmark:main"
mgbench-delannoy = "mgbench.delannoy:main"
mgbench-counter = "mgbench.counter:main"
mgbench-triad = "mgbench.triad:main"

[tool.hatch.build.targets.wheel]
packages = ["mgbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
