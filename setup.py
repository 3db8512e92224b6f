#!/usr/bin/env python3
# =============================================================================
#  jstype — setup.py
#
#  The version is read from jstype/__init__.py and runtime requirements
#  from requirements.txt, so both have a single source of truth.
#
#      pip install -e ".[dev]"
#      python -m pytest
# =============================================================================

from __future__ import annotations

import re
from pathlib import Path

from setuptools import setup, find_packages

# ---------------------------------------------------------------------------
#  Read version from the package so we have a single source of truth.
# ---------------------------------------------------------------------------
_HERE = Path(__file__).resolve().parent


def _read_version() -> str:
    """Extract the version string from jstype/__init__.py."""
    init_py = _HERE / "jstype" / "__init__.py"
    text = init_py.read_text(encoding="utf-8")
    match = re.search(r'^__version__(?::\s*str)?\s*=\s*"([^"]+)"', text, re.MULTILINE)
    if match:
        return match.group(1)
    return "0.0.0"


def _read_requirements() -> list[str]:
    """Read requirements.txt if it exists."""
    req_file = _HERE / "requirements.txt"
    if req_file.exists():
        lines = req_file.read_text(encoding="utf-8").splitlines()
        return [
            ln.strip()
            for ln in lines
            if ln.strip() and not ln.strip().startswith("#")
        ]
    return []


setup(
    name="jstype",
    version=_read_version(),
    description=(
        "Annotation-driven static type checker for JavaScript "
        "(inline /*: type */ comments and JSDoc tags)."
    ),
    license="MIT",
    author="jstype contributors",
    python_requires=">=3.10",
    packages=find_packages(
        include=[
            "jstype",
            "jstype.*",
        ],
        exclude=[
            "tests",
            "tests.*",
        ],
    ),
    install_requires=_read_requirements(),
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "ruff>=0.4",
            "mypy>=1.10",
        ],
    },

    # setuptools creates a platform-appropriate wrapper that calls
    # jstype.main:main.
    entry_points={
        "console_scripts": [
            "jstype=jstype.main:main",
        ],
    },

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Quality Assurance",
        "Topic :: Software Development :: Compilers",
    ],
    keywords=[
        "javascript",
        "static-analysis",
        "type-checking",
        "jsdoc",
        "tree-sitter",
    ],
    zip_safe=False,
)
