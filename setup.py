#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

readme = """Unicode table tools generate static reference tables of
codepoint properties and emoji sequences for lookup tools"""

setup(
    name="unitables",
    version="0.1.0",
    description="Unicode codepoint and emoji table generators",
    license="Apache",
    long_description=readme,
    python_requires=">=3.7",
    author="Unitables Authors",
    # more examples here http://docs.python.org/distutils/examples.html#pure-python-distribution-by-package
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "fontTools",
        "requests",
    ],
    extras_require={
        # for running the tests with pytest instead of unittest
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "unitables = unitables.generate_tables:main",
        ]
    },
)
