# storefront/config.py
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration settings for the storefront bot"""

    # Bot settings
    TELEGRAM_TOKEN: str = os.getenv("TELEGRAM_TOKEN", "")

    # Catalog API
    CATALOG_BASE_URL: str = os.getenv(
        "CATALOG_BASE_URL", "https://ouijagames-back.onrender.com/api/"
    )
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "30"))
    HTTP_LOG_BODIES: bool = _env_flag("HTTP_LOG_BODIES", "true")

    # Identity service (Firebase)
    FIREBASE_API_KEY: str = os.getenv("FIREBASE_API_KEY", "")
    FIREBASE_PROJECT_ID: str = os.getenv("FIREBASE_PROJECT_ID", "")
    AUTH_TIMEOUT: float = float(os.getenv("AUTH_TIMEOUT", "15"))
    PROFILE_WRITE_TIMEOUT: float = float(os.getenv("PROFILE_WRITE_TIMEOUT", "5"))

    # Image upload; when empty, picked images are kept in the local cache
    IMAGE_UPLOAD_URL: str = os.getenv("IMAGE_UPLOAD_URL", "")

    # Other settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Paths
    CACHE_DIR = Path(os.getenv("CACHE_DIR", str(BASE_DIR / "cache")))
    LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

    @classmethod
    def validate(cls):
        """Check required settings before the bot starts"""
        if not cls.TELEGRAM_TOKEN:
            raise ValueError("No TELEGRAM_TOKEN set in environment")
        if not cls.FIREBASE_API_KEY:
            raise ValueError("No FIREBASE_API_KEY set in environment")
        if not cls.CATALOG_BASE_URL:
            raise ValueError("No CATALOG_BASE_URL set in environment")

        # Ensure directories exist
        cls.CACHE_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)


def setup_logging():
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    Config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = Config.LOG_DIR / "bot.log"

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
    # python-telegram-bot polls through httpx and logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
