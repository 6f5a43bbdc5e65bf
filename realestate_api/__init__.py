"""
Real estate investment calculation service.
"""

__version__ = "0.1.0"
