"""
gh-manager — install, validate and proxy the GitHub CLI (``gh``).
"""

__version__ = "0.1.0"
