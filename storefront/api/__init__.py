# storefront/api/__init__.py
from .catalog_client import CatalogClient
from .identity_client import FirebaseIdentityClient, AuthUser

__all__ = ['CatalogClient', 'FirebaseIdentityClient', 'AuthUser']
