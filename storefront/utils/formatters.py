# storefront/utils/formatters.py
from typing import Optional, Sequence
from ..models.category import Category
from ..models.form import ProductDraft, SelectedImage
from ..models.product import Product

FIELD_LABELS = {
    'name': '🏷 Nombre',
    'description': '📝 Descripción',
    'price': '💰 Precio',
    'stock': '📦 Stock',
    'img': '🖼 Imagen',
}

def format_price(amount: int) -> str:
    """Formato de precio con separador de miles"""
    return f"${amount:,}".replace(",", ".")

def format_product(product: Product) -> str:
    """Detalle de un producto"""
    return (
        f"🏷 {product.name}\n"
        f"📝 {product.description}\n"
        f"💰 Precio: {format_price(product.price)}\n"
        f"📦 Stock: {product.stock if product.in_stock else 'Agotado'}\n"
        f"🗂 Categoría: {product.category.name}\n"
    )

def format_product_list(products: Sequence[Product]) -> str:
    if not products:
        return "📭 No hay productos disponibles."
    lines = ["🛍 Productos:\n"]
    for product in products:
        lines.append(f"• {product.name} | {format_price(product.price)} | stock {product.stock}")
    return "\n".join(lines)

def category_name(categories: Sequence[Category], categoria_id: str) -> str:
    for category in categories:
        if str(category.id) == categoria_id:
            return category.name
    return "—"

def format_draft(draft: ProductDraft, categories: Sequence[Category],
                 image: Optional[SelectedImage] = None) -> str:
    """Resumen del borrador antes de guardar"""
    if image is not None:
        image_text = f"imagen adjunta ({image.file_name})"
    else:
        image_text = draft.img or "—"

    return (
        "📋 Resumen del producto\n\n"
        f"{FIELD_LABELS['name']}: {draft.name or '—'}\n"
        f"{FIELD_LABELS['description']}: {draft.description or '—'}\n"
        f"{FIELD_LABELS['price']}: {draft.price or '—'}\n"
        f"{FIELD_LABELS['stock']}: {draft.stock or '—'}\n"
        f"{FIELD_LABELS['img']}: {image_text}\n"
        f"🗂 Categoría: {category_name(categories, draft.categoria_id)}\n"
    )

def format_draft_errors(draft: ProductDraft) -> str:
    lines = ["❌ Revisa los siguientes campos:"]
    for field, message in draft.errors.items():
        lines.append(f"{FIELD_LABELS[field]}: {message}")
    if not draft.categoria_id:
        lines.append("🗂 Categoría: selecciona una categoría")
    return "\n".join(lines)
