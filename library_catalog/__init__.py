"""
Local library catalog: author and genre pages.
"""

__version__ = "1.0.0"
