# storefront/handlers/__init__.py
"""Telegram handlers"""
from .base_handler import BaseHandler
from .auth_handlers import AuthHandler
from .product_handlers import ProductHandler

__all__ = [
    'BaseHandler',
    'AuthHandler',
    'ProductHandler'
]
