"""Package setup for fios_stats."""

from setuptools import setup, find_packages

setup(
    name="fios-stats",
    version="1.0.0",
    description="Network statistics retriever for the Fios Quantum G1000 router admin API",
    packages=find_packages(include=["fios_stats", "fios_stats.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
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
            "fios-stats=fios_stats.cli:main",
        ],
    },
)
