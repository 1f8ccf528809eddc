# storefront/__init__.py
"""Telegram storefront client for the OuijaGames catalog"""

__version__ = "0.1.0"
