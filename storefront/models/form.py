# storefront/models/form.py
from typing import Optional
from pydantic import BaseModel, ConfigDict

class ProductDraft(BaseModel):
    """In-progress product form; every edit produces a new instance"""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    price: str = ""
    stock: str = ""
    img: str = ""
    categoria_id: str = ""

    name_error: Optional[str] = None
    description_error: Optional[str] = None
    price_error: Optional[str] = None
    stock_error: Optional[str] = None
    img_error: Optional[str] = None

    @property
    def errors(self) -> dict:
        """Field name -> message for every field currently in error"""
        fields = ("name", "description", "price", "stock", "img")
        return {
            field: getattr(self, f"{field}_error")
            for field in fields
            if getattr(self, f"{field}_error") is not None
        }

class SelectedImage(BaseModel):
    """Image picked locally, pending resolution to a storable reference"""
    model_config = ConfigDict(frozen=True)

    content: bytes
    file_name: str = "image.jpg"
    mime_type: str = "image/jpeg"
