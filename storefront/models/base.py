# storefront/models/base.py
from pydantic import BaseModel, ConfigDict

class CatalogModel(BaseModel):
    """Base model for values owned by the catalog server"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)
