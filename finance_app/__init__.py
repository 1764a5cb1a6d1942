"""
Stark Finance personal-finance calculation service.
"""

__version__ = "0.1.0"
