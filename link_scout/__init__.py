"""
LinkScout package initializer.
Defines package version.
"""
__version__ = "0.1.0"
