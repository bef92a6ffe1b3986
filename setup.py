"""Package setup for edgeos_api."""

from setuptools import setup, find_packages

setup(
    name="edgeos-api",
    version="1.0.0",
    description="Client for the web management API of Ubiquiti EdgeOS routers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "edgeos-api=edgeos_api.cli:main",
        ],
    },
)
