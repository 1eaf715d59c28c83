# setup.py
from setuptools import setup, find_packages

setup(
    name="meshpreview",
    version="1.0.0",
    description="Camera and orbit navigation core for a 3D mesh viewer",
    packages=find_packages(include=["meshpreview", "meshpreview.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "glfw>=2.5.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
)
