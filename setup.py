# setup.py - tensor_categories package
from setuptools import setup, find_packages

setup(
    name="tensor_categories",
    version="0.1.0",
    description="Computer algebra for fusion categories, centralizers and Drinfeld centers",
    packages=find_packages(include=["tensor_categories", "tensor_categories.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "sympy",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
