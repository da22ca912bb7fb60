"""
bbcd core: setuptools build script.

Usage:
    # Development:
    pip install -e .

    # With test tooling:
    pip install -e ".[test]"
"""

from setuptools import setup

APP_NAME = "bbcd"

setup(
    name=APP_NAME,
    version="0.2.0",
    description="Recording-job stages, source catalog and scheduling rules for BBCD",
    packages=[
        "bbcd",
        "bbcd.core",
    ],
    py_modules=["main"],
    install_requires=[
        "requests>=2.28.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "bbcd=main:main",
        ],
    },
)
