# storefront/services/__init__.py
from .product_repository import ProductRepository
from .image_service import ImageService
from .auth_service import AuthService, AuthResult, classify_auth_error

__all__ = [
    'ProductRepository',
    'ImageService',
    'AuthService',
    'AuthResult',
    'classify_auth_error'
]
