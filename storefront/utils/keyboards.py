# storefront/utils/keyboards.py
from typing import Sequence
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from ..models.category import Category
from ..models.product import Product

class Keyboards:
    @staticmethod
    def welcome_menu() -> InlineKeyboardMarkup:
        """Menú para usuarios sin sesión"""
        keyboard = [
            [InlineKeyboardButton("🔑 Iniciar sesión", callback_data="login")],
            [InlineKeyboardButton("📝 Registrarse", callback_data="register")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def main_menu() -> InlineKeyboardMarkup:
        """Menú principal"""
        keyboard = [
            [InlineKeyboardButton("🛍 Ver productos", callback_data="list_products")],
            [InlineKeyboardButton("➕ Agregar producto", callback_data="add_product")],
            [InlineKeyboardButton("🚪 Cerrar sesión", callback_data="logout")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def product_list_menu(products: Sequence[Product]) -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton(product.name, callback_data=f"show_product_{product.id}")]
            for product in products
        ]
        keyboard.append([
            InlineKeyboardButton("🔄 Recargar", callback_data="list_products"),
            InlineKeyboardButton("🏠 Menú", callback_data="main_menu")
        ])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def retry_menu() -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton("🔄 Reintentar", callback_data="list_products")],
            [InlineKeyboardButton("🏠 Menú", callback_data="main_menu")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def product_menu(product_id: int) -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton("🗑 Eliminar", callback_data=f"delete_product_{product_id}")],
            [InlineKeyboardButton("⬅️ Volver", callback_data="list_products")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def confirm_delete_menu(product_id: int) -> InlineKeyboardMarkup:
        keyboard = [[
            InlineKeyboardButton("✅ Sí", callback_data="confirm_delete"),
            InlineKeyboardButton("❌ No", callback_data=f"show_product_{product_id}")
        ]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def categories_menu(categories: Sequence[Category]) -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton(category.name, callback_data=f"category_{category.id}")]
            for category in categories
        ]
        keyboard.append([InlineKeyboardButton("🔙 Cancelar", callback_data="cancel_add_product")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def confirm_product_menu() -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton("💾 Guardar", callback_data="save_product")],
            [InlineKeyboardButton("🔙 Cancelar", callback_data="cancel_add_product")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def cancel_keyboard() -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup([[
            InlineKeyboardButton("🔙 Cancelar", callback_data="cancel_add_product")
        ]])
