"""Setup configuration for the Date Range Slicer package."""

from setuptools import setup, find_packages

setup(
    name="date-range-slicer",
    version="1.0.0",
    description="Date range slicer widget: range presets, column discovery and host filter application",
    author="Alex",
    author_email="",
    packages=find_packages(include=["src", "src.*", "config", "config.*"]),
    package_data={"config": ["*.yaml"]},
    python_requires=">=3.11",
    install_requires=[
        "pandas>=2.1.0",
        "streamlit>=1.32.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "black>=24.1.0",
            "ruff>=0.2.0",
        ],
    },
)
