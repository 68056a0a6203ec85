# setup.py
from setuptools import setup, find_packages

setup(
    name="mallet",
    version="0.1.0",
    description="A small Lisp interpreter: value model, environments, evaluator and core library",
    packages=find_packages(include=["mallet", "mallet.*"]),
    python_requires=">=3.10",
    install_requires=[
        "loguru>=0.7",
        "prompt_toolkit>=3.0",
        "typer>=0.9",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": ["mallet=mallet.cli:main"],
    },
    zip_safe=False,
)
