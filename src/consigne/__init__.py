"""
Consigne - username-addressed escrow payments client core.
"""

__version__ = "0.1.0"
