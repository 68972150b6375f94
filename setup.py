"""Setup script for the Poisson multigrid solver."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text() if (this_directory / "README.md").exists() else ""

# Read version without importing the package
version = {}
exec((this_directory / "src" / "poisson_multigrid" / "_version.py").read_text(), version)

setup(
    name="poisson-multigrid",
    version=version["__version__"],
    description="Geometric multigrid V-cycle solver for the 2-D Poisson equation",
    long_description=long_description,
    long_description_content_type="text/markdown",

    packages=find_packages(where="src"),
    package_dir={"": "src"},

    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "numba>=0.58.0",
        "matplotlib>=3.5.0",
        "pyyaml>=6.0",
    ],

    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "scipy>=1.9.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
            "isort>=5.12.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "scipy>=1.9.0",
        ],
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Scientific/Engineering :: Physics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Operating System :: OS Independent",
    ],

    keywords=[
        "multigrid", "pde", "poisson", "numerical-methods", "finite-difference",
        "gauss-seidel", "scientific-computing"
    ],

    entry_points={
        "console_scripts": [
            "poisson-multigrid=poisson_multigrid.cli:main",
        ],
    },

    zip_safe=False,
)
