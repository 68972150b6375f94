"""
Version information for the poisson-multigrid package.
"""

# Version follows semantic versioning: MAJOR.MINOR.PATCH
__version__ = "0.1.0"
