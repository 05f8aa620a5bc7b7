"""
Setup script for the layered_config package.
"""

from setuptools import setup, find_packages

setup(
    name="layered_config",
    version="1.0.0",
    description="Layered configuration lookup: properties file, fallback sources and environment",
    author="Layered Config Team",
    packages=find_packages(include=["layered_config", "layered_config.*"]),
    python_requires=">=3.8",
    install_requires=[
        # Configuration sources
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
