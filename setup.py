"""Setup script for logweave."""

from setuptools import setup, find_packages

setup(
    name="logweave",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.5.2",
        "dynaconf>=3.2.0",
        "structlog>=23.2.0",
        "rich>=13.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.4",
            "pytest-cov>=4.1.0",
            "black>=24.1.1",
            "isort>=5.13.2",
            "mypy>=1.8.0",
            "pylint>=3.0.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "logweave=logweave.cli:main",
        ],
    },
    python_requires=">=3.9",
)
