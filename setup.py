"""Setup configuration for microbench package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = (
    readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""
)

setup(
    name="microbench",
    version="1.0",
    description="Calibrated micro-benchmarking harness for synchronous and asynchronous Python functions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["microbench", "microbench.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: System :: Benchmark",
        "Topic :: Software Development :: Testing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.19.0",
        "pandas>=1.1.0",
        "pyyaml>=5.3.0",
        "rich>=10.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.12.0",
            "pytest-mock>=3.6.0",
            "black>=21.0",
            "flake8>=3.9",
            "isort>=5.0",
        ],
        "test": [
            "pytest>=6.0",
            "pytest-cov>=2.12.0",
            "pytest-mock>=3.6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "microbench=microbench.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
