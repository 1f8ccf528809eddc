# storefront/handlers/auth_handlers.py
import logging
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import (
    ContextTypes, ConversationHandler, CommandHandler,
    MessageHandler, CallbackQueryHandler, filters
)
from .base_handler import BaseHandler
from ..constants import *

logger = logging.getLogger(__name__)

class AuthHandler(BaseHandler):
    """Start menu, registration and sign-in"""

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """/start command"""
        user = update.effective_user
        if self.is_signed_in(context):
            await update.message.reply_text(
                f"👋 Hola {user.first_name}, ¿qué quieres hacer?",
                reply_markup=self.keyboards.main_menu()
            )
        else:
            await update.message.reply_text(
                f"👋 Hola {user.first_name}, bienvenido a OuijaGames.\n"
                "Inicia sesión o regístrate para continuar.",
                reply_markup=self.keyboards.welcome_menu()
            )

    async def show_main_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if not self.is_signed_in(context):
            await self.reply(update, NOT_SIGNED_IN, self.keyboards.welcome_menu())
            return
        await self.reply(update, "🏠 Menú principal", self.keyboards.main_menu())

    async def logout(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        self.get_auth_service(context).sign_out()
        context.user_data.pop(PRODUCT_VM_KEY, None)
        await self.reply(update, "👋 Sesión cerrada.", self.keyboards.welcome_menu())

    # Registration

    async def start_register(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        context.user_data[REGISTER_KEY] = {}
        await self.reply(update, "👤 Ingresa tu nombre de usuario:")
        return WAITING_REGISTER_USER

    async def handle_register_user(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        context.user_data[REGISTER_KEY]['usuario'] = update.message.text
        await update.message.reply_text("🪪 Ingresa tu RUT:")
        return WAITING_REGISTER_RUT

    async def handle_register_rut(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        context.user_data[REGISTER_KEY]['rut'] = update.message.text
        await update.message.reply_text("📧 Ingresa tu correo:")
        return WAITING_REGISTER_EMAIL

    async def handle_register_email(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        context.user_data[REGISTER_KEY]['correo'] = update.message.text.strip()
        await update.message.reply_text("🔑 Ingresa tu clave:")
        return WAITING_REGISTER_PASSWORD

    async def handle_register_password(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        password = update.message.text
        await self._forget_message(update)

        data = context.user_data.pop(REGISTER_KEY, {})
        await update.effective_chat.send_message("⏳ Creando tu cuenta...")

        result = await self.get_auth_service(context).register(
            data.get('usuario', ''),
            data.get('rut', ''),
            data.get('correo', ''),
            password
        )
        if result.stale:
            return ConversationHandler.END

        if result.success:
            await update.effective_chat.send_message(
                "✅ Registro exitoso. ¡Bienvenido!",
                reply_markup=self.keyboards.main_menu()
            )
        else:
            await update.effective_chat.send_message(
                f"❌ {result.message}",
                reply_markup=self.keyboards.welcome_menu()
            )
        return ConversationHandler.END

    # Sign-in

    async def start_login(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await self.reply(update, "📧 Ingresa tu correo:")
        return WAITING_LOGIN_EMAIL

    async def handle_login_email(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        context.user_data['login_email'] = update.message.text.strip()
        await update.message.reply_text("🔑 Ingresa tu clave:")
        return WAITING_LOGIN_PASSWORD

    async def handle_login_password(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        password = update.message.text
        await self._forget_message(update)

        email = context.user_data.pop('login_email', '')
        result = await self.get_auth_service(context).sign_in(email, password)
        if result.stale:
            return ConversationHandler.END

        if result.success:
            await update.effective_chat.send_message(
                f"✅ Sesión iniciada como {result.user.email}",
                reply_markup=self.keyboards.main_menu()
            )
        else:
            await update.effective_chat.send_message(
                f"❌ {result.message}",
                reply_markup=self.keyboards.welcome_menu()
            )
        return ConversationHandler.END

    @staticmethod
    async def _forget_message(update: Update):
        """Passwords should not stay in the chat history"""
        try:
            await update.message.delete()
        except TelegramError as e:
            logger.debug("Could not delete password message: %s", e)

    def conversation_handler(self) -> ConversationHandler:
        text = filters.TEXT & ~filters.COMMAND
        return ConversationHandler(
            entry_points=[
                CallbackQueryHandler(self.start_register, pattern='^register$'),
                CallbackQueryHandler(self.start_login, pattern='^login$'),
                CommandHandler('registro', self.start_register),
                CommandHandler('login', self.start_login)
            ],
            states={
                WAITING_REGISTER_USER: [MessageHandler(text, self.handle_register_user)],
                WAITING_REGISTER_RUT: [MessageHandler(text, self.handle_register_rut)],
                WAITING_REGISTER_EMAIL: [MessageHandler(text, self.handle_register_email)],
                WAITING_REGISTER_PASSWORD: [MessageHandler(text, self.handle_register_password)],
                WAITING_LOGIN_EMAIL: [MessageHandler(text, self.handle_login_email)],
                WAITING_LOGIN_PASSWORD: [MessageHandler(text, self.handle_login_password)]
            },
            fallbacks=[CommandHandler('cancelar', self.cancel_conversation)]
        )

    def handlers(self) -> list:
        return [
            CommandHandler('start', self.start),
            CommandHandler('logout', self.logout),
            CallbackQueryHandler(self.logout, pattern='^logout$'),
            CallbackQueryHandler(self.show_main_menu, pattern='^main_menu$'),
            self.conversation_handler()
        ]
