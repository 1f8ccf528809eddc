# storefront/handlers/product_handlers.py
import logging
from telegram import Update
from telegram.ext import (
    ContextTypes, ConversationHandler, CommandHandler,
    MessageHandler, CallbackQueryHandler, filters
)
from .base_handler import BaseHandler
from ..models.form import SelectedImage
from ..utils.formatters import format_draft, format_draft_errors, format_product, format_product_list
from ..constants import *

logger = logging.getLogger(__name__)

# Draft field -> conversation state asking for it, in form order
FIELD_STATES = {
    'name': WAITING_PRODUCT_NAME,
    'description': WAITING_DESCRIPTION,
    'price': WAITING_PRICE,
    'stock': WAITING_STOCK,
    'img': WAITING_IMAGE,
}

PROMPTS = {
    WAITING_PRODUCT_NAME: "🏷 Ingresa el nombre del producto:",
    WAITING_DESCRIPTION: "📝 Ingresa la descripción del producto:",
    WAITING_PRICE: "💰 Ingresa el precio (número entero mayor a 0):",
    WAITING_STOCK: "📦 Ingresa el stock inicial (0 o mayor):",
    WAITING_IMAGE: (
        "🖼 Envía una foto del producto o escribe la URL de la imagen.\n"
        "Usa /omitir para dejarla vacía."
    ),
}

class ProductHandler(BaseHandler):
    """Product list, product details, deletion and the add-product form"""

    # Product list

    async def list_products(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if not self.is_signed_in(context):
            await self.reply(update, NOT_SIGNED_IN, self.keyboards.welcome_menu())
            return

        view_model = self.get_product_vm(context)
        if view_model.is_loading.value:
            if update.callback_query:
                await update.callback_query.answer("⏳ Cargando...")
            return

        if view_model.is_started:
            await view_model.load_products()
        else:
            await view_model.start()

        if view_model.error.value:
            await self.reply(
                update,
                f"❌ Error: {view_model.error.value}",
                self.keyboards.retry_menu()
            )
            return

        products = view_model.products.value
        await self.reply(
            update,
            format_product_list(products),
            self.keyboards.product_list_menu(products)
        )

    async def show_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if not self.is_signed_in(context):
            await self.reply(update, NOT_SIGNED_IN, self.keyboards.welcome_menu())
            return

        product_id = int(update.callback_query.data.split('_')[2])
        view_model = self.get_product_vm(context)
        await view_model.load_product_by_id(product_id)

        product = view_model.selected_product.value
        if product is None:
            await self.reply(update, "❌ Producto no encontrado.", self.keyboards.retry_menu())
            return

        await self.reply(update, format_product(product), self.keyboards.product_menu(product_id))

    async def request_delete(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if not self.is_signed_in(context):
            await self.reply(update, NOT_SIGNED_IN, self.keyboards.welcome_menu())
            return

        product_id = int(update.callback_query.data.split('_')[2])
        context.user_data[DELETING_KEY] = product_id
        await self.reply(
            update,
            "❓ ¿Seguro que quieres eliminar este producto?\nEsta acción no se puede deshacer.",
            self.keyboards.confirm_delete_menu(product_id)
        )

    async def confirm_delete(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        product_id = context.user_data.pop(DELETING_KEY, None)
        if product_id is None or not self.is_signed_in(context):
            await self.reply(update, "⚠️ No hay ningún producto pendiente de eliminar.",
                             self.keyboards.retry_menu())
            return

        view_model = self.get_product_vm(context)
        deleted = await view_model.delete_product(product_id)

        if deleted:
            products = view_model.products.value
            await self.reply(
                update,
                "✅ Producto eliminado.\n\n" + format_product_list(products),
                self.keyboards.product_list_menu(products)
            )
        else:
            message = view_model.error.value or DELETE_FAILED
            view_model.clear_error()
            await self.reply(update, f"❌ {message}", self.keyboards.retry_menu())

    # Add-product form

    async def start_add_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if not self.is_signed_in(context):
            await self.reply(update, NOT_SIGNED_IN, self.keyboards.welcome_menu())
            return ConversationHandler.END

        view_model = self.get_product_vm(context)
        await view_model.start()
        view_model.reset_form()
        context.user_data[FIXING_KEY] = False

        await self.reply(update, PROMPTS[WAITING_PRODUCT_NAME], self.keyboards.cancel_keyboard())
        return WAITING_PRODUCT_NAME

    async def handle_name(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        self.get_product_vm(context).on_name_change(update.message.text)
        return await self._next(update, context, WAITING_DESCRIPTION)

    async def handle_description(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        self.get_product_vm(context).on_description_change(update.message.text)
        return await self._next(update, context, WAITING_PRICE)

    async def handle_price(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        self.get_product_vm(context).on_price_change(update.message.text)
        return await self._next(update, context, WAITING_STOCK)

    async def handle_stock(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        self.get_product_vm(context).on_stock_change(update.message.text)
        return await self._next(update, context, WAITING_IMAGE)

    async def handle_image_url(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        self.get_product_vm(context).on_img_change(update.message.text.strip())
        return await self._next(update, context, WAITING_CATEGORY)

    async def handle_image_photo(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        photo = update.message.photo[-1]
        file = await context.bot.get_file(photo.file_id)
        content = await file.download_as_bytearray()

        self.get_product_vm(context).update_selected_image(SelectedImage(
            content=bytes(content),
            file_name=f"{photo.file_unique_id}.jpg"
        ))
        return await self._next(update, context, WAITING_CATEGORY)

    async def skip_image(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        return await self._next(update, context, WAITING_CATEGORY)

    async def handle_category(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        categoria_id = update.callback_query.data.split('_')[1]
        self.get_product_vm(context).on_categoria_id_change(categoria_id)
        return await self._show_summary(update, context)

    async def save_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        view_model = self.get_product_vm(context)
        if view_model.is_submitting:
            await query.answer("⏳ Guardando...")
            return CONFIRM_PRODUCT

        await query.answer()
        await query.edit_message_text("⏳ Guardando producto...")

        if await view_model.create_product():
            view_model.reset_creation_success()
            context.user_data.pop(FIXING_KEY, None)
            await query.edit_message_text(
                "✅ Producto creado con éxito.",
                reply_markup=self.keyboards.main_menu()
            )
            return ConversationHandler.END

        draft = view_model.form_state.value
        if draft.errors or not draft.categoria_id:
            # Rejected: ask again for the first invalid field, then back to the summary
            context.user_data[FIXING_KEY] = True
            await query.edit_message_text(format_draft_errors(draft))
            if draft.errors:
                state = FIELD_STATES[next(iter(draft.errors))]
                await update.effective_chat.send_message(
                    PROMPTS[state], reply_markup=self.keyboards.cancel_keyboard()
                )
                return state
            return await self._ask_category(update, context, new_message=True)

        message = view_model.error.value or CREATE_FAILED
        view_model.clear_error()
        await query.edit_message_text(
            f"❌ {message}\n\nPuedes intentarlo de nuevo.",
            reply_markup=self.keyboards.confirm_product_menu()
        )
        return CONFIRM_PRODUCT

    async def cancel_add_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        self.get_product_vm(context).reset_form()
        context.user_data.pop(FIXING_KEY, None)
        return await self.cancel_conversation(update, context)

    async def _next(self, update: Update, context: ContextTypes.DEFAULT_TYPE, state: int):
        """Ask for the next field, or return to the summary when fixing a rejected draft"""
        if context.user_data.get(FIXING_KEY):
            return await self._show_summary(update, context)
        if state == WAITING_CATEGORY:
            return await self._ask_category(update, context)
        await update.message.reply_text(PROMPTS[state], reply_markup=self.keyboards.cancel_keyboard())
        return state

    async def _ask_category(self, update: Update, context: ContextTypes.DEFAULT_TYPE,
                            new_message: bool = False):
        view_model = self.get_product_vm(context)
        if not view_model.categories.value:
            await view_model.load_categories()

        categories = view_model.categories.value
        if not categories:
            text = "⚠️ No hay categorías disponibles en este momento."
            await update.effective_chat.send_message(text)
            return await self._show_summary(update, context, new_message=True)

        text = "🗂 Selecciona la categoría del producto:"
        markup = self.keyboards.categories_menu(categories)
        if new_message:
            await update.effective_chat.send_message(text, reply_markup=markup)
        else:
            await self.reply(update, text, markup)
        return WAITING_CATEGORY

    async def _show_summary(self, update: Update, context: ContextTypes.DEFAULT_TYPE,
                            new_message: bool = False):
        view_model = self.get_product_vm(context)
        text = format_draft(
            view_model.form_state.value,
            view_model.categories.value,
            view_model.selected_image.value
        )
        markup = self.keyboards.confirm_product_menu()
        if new_message:
            await update.effective_chat.send_message(text, reply_markup=markup)
        else:
            await self.reply(update, text, markup)
        return CONFIRM_PRODUCT

    def conversation_handler(self) -> ConversationHandler:
        text = filters.TEXT & ~filters.COMMAND
        return ConversationHandler(
            entry_points=[
                CallbackQueryHandler(self.start_add_product, pattern='^add_product$'),
                CommandHandler('agregar', self.start_add_product)
            ],
            states={
                WAITING_PRODUCT_NAME: [MessageHandler(text, self.handle_name)],
                WAITING_DESCRIPTION: [MessageHandler(text, self.handle_description)],
                WAITING_PRICE: [MessageHandler(text, self.handle_price)],
                WAITING_STOCK: [MessageHandler(text, self.handle_stock)],
                WAITING_IMAGE: [
                    MessageHandler(filters.PHOTO, self.handle_image_photo),
                    MessageHandler(text, self.handle_image_url),
                    CommandHandler('omitir', self.skip_image)
                ],
                WAITING_CATEGORY: [
                    CallbackQueryHandler(self.handle_category, pattern='^category_')
                ],
                CONFIRM_PRODUCT: [
                    CallbackQueryHandler(self.save_product, pattern='^save_product$')
                ]
            },
            fallbacks=[
                CommandHandler('cancelar', self.cancel_add_product),
                CallbackQueryHandler(self.cancel_add_product, pattern='^cancel_add_product$')
            ]
        )

    def handlers(self) -> list:
        return [
            self.conversation_handler(),
            CommandHandler('productos', self.list_products),
            CallbackQueryHandler(self.list_products, pattern='^list_products$'),
            CallbackQueryHandler(self.show_product, pattern=r'^show_product_\d+$'),
            CallbackQueryHandler(self.request_delete, pattern=r'^delete_product_\d+$'),
            CallbackQueryHandler(self.confirm_delete, pattern='^confirm_delete$')
        ]
