#!/usr/bin/env python3
"""
optuna-bridge: drive optuna studies through the optuna command-line tool.

Search spaces go out as JSON, every operation runs ``optuna`` as a
subprocess, and its JSON output comes back as small value objects.
"""

from pathlib import Path
from setuptools import setup, find_packages

# Project metadata
PROJECT_NAME = "optuna-bridge"
VERSION = "0.1.0"
DESCRIPTION = "Drive optuna studies through the optuna CLI and its JSON output"
LONG_DESCRIPTION = (Path(__file__).parent / "README.md").read_text(encoding="utf-8")
LONG_DESCRIPTION_CONTENT_TYPE = "text/markdown"
LICENSE = "MIT"
PYTHON_REQUIRES = ">=3.10"

# Core dependencies
INSTALL_REQUIRES = [
    "typer>=0.9.0",
    "click>=8.1.0",
    "rich>=13.0.0",
    "pyyaml>=6.0",
    "pydantic>=2.0",
    "python-dotenv>=1.0.0,<2",
]

# Development dependencies
EXTRAS_REQUIRE = {
    "dev": [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "black>=23.0.0",
        "ruff>=0.1.0",
        "mypy>=1.0.0",
    ],
    "test": [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "coverage>=7.0.0",
    ],
    # The external tool itself; install where the optuna CLI is not already on PATH
    "optuna": [
        "optuna>=3.0.0",
    ],
}

# Include all extras in "all"
EXTRAS_REQUIRE["all"] = [
    dep for deps in EXTRAS_REQUIRE.values() for dep in deps
]

# Package classification
CLASSIFIERS = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "License :: OSI Approved :: MIT License",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

# Entry points (CLI commands)
ENTRY_POINTS = {
    "console_scripts": [
        "optuna-bridge=optuna_bridge.cli:main",
    ],
}

# Package discovery
PACKAGES = find_packages(where="src")
PACKAGE_DIR = {"": "src"}

# Setup configuration
setup(
    name=PROJECT_NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type=LONG_DESCRIPTION_CONTENT_TYPE,
    license=LICENSE,

    # Package configuration
    packages=PACKAGES,
    package_dir=PACKAGE_DIR,

    # Dependencies
    python_requires=PYTHON_REQUIRES,
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,

    # Entry points
    entry_points=ENTRY_POINTS,

    # Classification
    classifiers=CLASSIFIERS,

    keywords="optuna hyperparameter optimization cli subprocess",

    # Build configuration
    zip_safe=False,
    platforms=["any"],
)
