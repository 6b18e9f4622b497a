#!/usr/bin/env python3
"""Setup script for note_junction package.
"""

from setuptools import find_packages, setup

setup(
    name="note_junction",
    version="0.3.0",
    description="Group knowledge-base notes by their most common references",
    author="Note Junction Team",
    packages=find_packages(include=["note_junction*"]),
    python_requires=">=3.10",
    install_requires=[
        "pandas>=1.5.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "pandas-stubs>=2.0.0",
            "types-PyYAML>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "note-junction=note_junction.cli:main",
        ],
    },
)
