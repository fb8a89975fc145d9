# setup.py
from setuptools import setup, find_packages

setup(
    name="modu",
    version="0.1.0",
    packages=find_packages(include=["modu", "modu.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["modu=modu.cli:main"],
    },
    zip_safe=False,
)
