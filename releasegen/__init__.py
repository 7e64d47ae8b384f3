"""
releasegen — generate release-automation config for multi-distribution projects.
"""

__version__ = "0.1.0"
