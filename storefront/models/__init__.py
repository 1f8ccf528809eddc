# storefront/models/__init__.py
from .category import Category
from .product import Product, ProductRequest
from .form import ProductDraft, SelectedImage
from .status import SubmissionStatus, StatusKind, ApiResponse, ResponseKind

__all__ = [
    'Category',
    'Product',
    'ProductRequest',
    'ProductDraft',
    'SelectedImage',
    'SubmissionStatus',
    'StatusKind',
    'ApiResponse',
    'ResponseKind'
]
