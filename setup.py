"""Package setup for style_rebaser."""

from setuptools import setup, find_packages

setup(
    name="style-rebaser",
    version="1.0.0",
    description="Sass-style stylesheet import resolver and url() rebaser",
    packages=find_packages(include=["style_rebaser", "style_rebaser.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "ui": [
            "tqdm>=4.66.0",
            "colorlog>=6.8.0",
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "style-rebaser=style_rebaser.cli:main",
        ],
    },
)
