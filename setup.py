#!/usr/bin/env python3
"""
Setup script for the iTunes Library Parser
"""

from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="itunes-library-parser",
    version="1.1.0",
    description="Streaming parser for iTunes Library.xml exports",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["itunes_library.tests"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Text Processing :: Markup :: XML",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "itunes-library=itunes_library.cli:main",
        ],
    },
    include_package_data=True,
)
