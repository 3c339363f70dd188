#!/usr/bin/python3

from setuptools import setup, find_packages

setup(
    name="protoprofile",
    version="1.0.0",
    description="Size profile of schema-described protobuf messages in pprof format",
    keywords=["protobuf", "pprof", "Size Profile", "Trace"],
    packages=find_packages(where=".", exclude=("tests", "tests.*")),
    python_requires=">=3.9",
    install_requires=[
        "protobuf>=4.25",
        "grpcio-tools",
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "protoprofile=protoprofile.main:main",
        ]
    }
)
