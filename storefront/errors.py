# storefront/errors.py
from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront errors"""


class CatalogError(StorefrontError):
    """Failure talking to the catalog API"""


class RemoteStatusError(CatalogError):
    """The catalog answered with a non-2xx status"""

    def __init__(self, message: str, status: int, body: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.body = body


class TransportError(CatalogError):
    """Network or timeout failure before a response was received"""


class IdentityError(StorefrontError):
    """The identity service rejected the request or was unreachable"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code or message
