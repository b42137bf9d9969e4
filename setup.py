# setup.py
from setuptools import setup, find_packages

setup(
    name="force_diagram",
    version="0.1.0",
    description="Force-directed network diagrams with rank and partition styling",
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "dist",
            "build",
        )
    ),
    install_requires=[
        "numpy>=1.22",
        "networkx>=3.4",
        "pandas",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "force-diagram=force_diagram.cli:main",
        ],
    },
    python_requires=">=3.10",
)
