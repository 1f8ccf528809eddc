# storefront/bot.py
import logging
from functools import partial
import aiohttp
from telegram import Update
from telegram.ext import Application, ContextTypes
from .api.catalog_client import CatalogClient
from .api.identity_client import FirebaseIdentityClient
from .config import Config
from .handlers import AuthHandler, ProductHandler
from .services.auth_service import AuthService
from .services.image_service import ImageService
from .services.product_repository import ProductRepository

logger = logging.getLogger(__name__)

class StorefrontBot:
    def __init__(self):
        """Build the application and register the handlers"""
        Config.validate()
        self.session: aiohttp.ClientSession = None
        self.application = (
            Application.builder()
            .token(Config.TELEGRAM_TOKEN)
            .post_init(self.on_startup)
            .post_shutdown(self.on_shutdown)
            .build()
        )
        self.setup_handlers()

    def setup_handlers(self):
        """Register the bot handlers"""
        for handler in AuthHandler().handlers():
            self.application.add_handler(handler)
        for handler in ProductHandler().handlers():
            self.application.add_handler(handler)
        self.application.add_error_handler(self.on_error)

    async def on_startup(self, application: Application):
        """Create the shared HTTP session and the services built on it"""
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=Config.HTTP_TIMEOUT)
        )
        catalog = CatalogClient(self.session, Config.CATALOG_BASE_URL, Config.HTTP_LOG_BODIES)
        identity = FirebaseIdentityClient(
            self.session, Config.FIREBASE_API_KEY, Config.FIREBASE_PROJECT_ID
        )

        application.bot_data['repository'] = ProductRepository(catalog)
        application.bot_data['image_service'] = ImageService(
            self.session, Config.CACHE_DIR, Config.IMAGE_UPLOAD_URL
        )
        application.bot_data['auth_factory'] = partial(
            AuthService, identity, Config.AUTH_TIMEOUT, Config.PROFILE_WRITE_TIMEOUT
        )
        logger.info("Catalog at %s", Config.CATALOG_BASE_URL)

    async def on_shutdown(self, application: Application):
        if self.session is not None:
            await self.session.close()
            logger.info("HTTP session closed")

    @staticmethod
    async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE):
        logger.error("Error while handling update %r", update, exc_info=context.error)
        if isinstance(update, Update) and update.effective_chat:
            await update.effective_chat.send_message(
                "⚠️ Ocurrió un error inesperado. Intenta nuevamente."
            )

    def run(self):
        """Start polling until interrupted"""
        logger.info("Starting bot...")
        self.application.run_polling(allowed_updates=Update.ALL_TYPES)
