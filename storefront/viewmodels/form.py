# storefront/viewmodels/form.py
"""Pure transitions over the product form.

Every edit returns a new draft with the edited value replaced and that
field's error cleared. Errors are only recomputed by ``validate``.
"""
import re
from typing import Optional, Sequence, Tuple
from ..models.category import Category
from ..models.form import ProductDraft
from .. import constants

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -2**31
_INT_MAX = 2**31 - 1

def parse_int(text: str) -> Optional[int]:
    """Strict integer parse: optional sign and digits, 32-bit range"""
    if not _INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value < _INT_MIN or value > _INT_MAX:
        return None
    return value

def on_name_change(draft: ProductDraft, name: str) -> ProductDraft:
    return draft.model_copy(update={"name": name, "name_error": None})

def on_description_change(draft: ProductDraft, description: str) -> ProductDraft:
    return draft.model_copy(update={"description": description, "description_error": None})

def on_price_change(draft: ProductDraft, price: str) -> ProductDraft:
    return draft.model_copy(update={"price": price, "price_error": None})

def on_stock_change(draft: ProductDraft, stock: str) -> ProductDraft:
    return draft.model_copy(update={"stock": stock, "stock_error": None})

def on_img_change(draft: ProductDraft, img: str) -> ProductDraft:
    return draft.model_copy(update={"img": img, "img_error": None})

def on_categoria_id_change(draft: ProductDraft, categoria_id: str) -> ProductDraft:
    return draft.model_copy(update={"categoria_id": categoria_id})

def validate(draft: ProductDraft, has_selected_image: bool) -> Tuple[ProductDraft, bool]:
    """Recompute every field error and report whether the draft can be submitted.

    A blank category makes the draft invalid without attaching any message.
    """
    name_error = constants.NAME_REQUIRED if not draft.name.strip() else None
    description_error = (
        constants.DESCRIPTION_REQUIRED if not draft.description.strip() else None
    )

    price = parse_int(draft.price)
    price_error = constants.PRICE_INVALID if price is None or price <= 0 else None

    stock = parse_int(draft.stock)
    stock_error = constants.STOCK_INVALID if stock is None or stock < 0 else None

    img_error = (
        constants.IMAGE_REQUIRED
        if not draft.img.strip() and not has_selected_image
        else None
    )

    validated = draft.model_copy(update={
        "name_error": name_error,
        "description_error": description_error,
        "price_error": price_error,
        "stock_error": stock_error,
        "img_error": img_error,
    })

    is_valid = not validated.errors and bool(draft.categoria_id.strip())
    return validated, is_valid

def default_categoria_id(categories: Sequence[Category]) -> str:
    return str(categories[0].id) if categories else ""

def reset_draft(categories: Sequence[Category]) -> ProductDraft:
    """Fresh draft preselecting the first category, if any"""
    return ProductDraft(categoria_id=default_categoria_id(categories))
