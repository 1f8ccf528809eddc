# storefront/handlers/base_handler.py
from typing import Optional
from telegram import InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes, ConversationHandler
from ..services.auth_service import AuthService
from ..utils.keyboards import Keyboards
from ..viewmodels.product_view_model import ProductViewModel
from ..constants import *

class BaseHandler:
    """Base class for the bot handlers"""

    def __init__(self):
        self.keyboards = Keyboards()

    async def cancel_conversation(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Abort the current conversation"""
        menu = self.keyboards.main_menu() if self.is_signed_in(context) else self.keyboards.welcome_menu()
        await self.reply(update, OPERATION_CANCELLED, menu)
        return ConversationHandler.END

    @staticmethod
    async def reply(update: Update, text: str, reply_markup: Optional[InlineKeyboardMarkup] = None):
        """Answer a button press by editing its message, or a text message with a new one"""
        query = update.callback_query
        if query:
            await query.answer()
            await query.edit_message_text(text, reply_markup=reply_markup)
        else:
            await update.effective_message.reply_text(text, reply_markup=reply_markup)

    @staticmethod
    def get_auth_service(context: ContextTypes.DEFAULT_TYPE) -> AuthService:
        service = context.user_data.get(AUTH_SERVICE_KEY)
        if service is None:
            service = context.bot_data['auth_factory']()
            context.user_data[AUTH_SERVICE_KEY] = service
        return service

    @staticmethod
    def get_product_vm(context: ContextTypes.DEFAULT_TYPE) -> ProductViewModel:
        view_model = context.user_data.get(PRODUCT_VM_KEY)
        if view_model is None:
            view_model = ProductViewModel(
                context.bot_data['repository'],
                context.bot_data.get('image_service')
            )
            context.user_data[PRODUCT_VM_KEY] = view_model
        return view_model

    def is_signed_in(self, context: ContextTypes.DEFAULT_TYPE) -> bool:
        return self.get_auth_service(context).is_signed_in
