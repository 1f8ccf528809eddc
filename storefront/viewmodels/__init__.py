# storefront/viewmodels/__init__.py
from .product_view_model import ProductViewModel

__all__ = ['ProductViewModel']
