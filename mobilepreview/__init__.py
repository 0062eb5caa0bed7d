"""
Mobile Preview Tooling

Validates a host's mobile development environment and drives an iOS
simulator so a web component preview can be opened inside it.
"""

__version__ = "1.0.0"
