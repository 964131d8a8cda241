from dotenv import load_dotenv
import os
from typing import Final # So that my variables are immutable

# Load environment variables from .env file
load_dotenv(dotenv_path=".env")

# Database configuration
DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./foody.db")

# JWT configuration
SECRET_KEY: Final[str] = os.getenv("SECRET_KEY", "your-secret-key-here")  # Change in production!
ALGORITHM: Final[str] = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: Final[int] = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))
COOKIE_NAME: Final[str] = os.getenv("COOKIE_NAME", "token")
COOKIE_SECURE: Final[bool] = os.getenv("COOKIE_SECURE", "False").lower() in ("true", "1", "t")

# API
API_VERSION: Final[str] = os.getenv("API_VERSION", "v1")
FRONTEND_URL: Final[str] = os.getenv("FRONTEND_URL", "http://localhost:3000")
RATE_LIMIT_ENABLED: Final[bool] = os.getenv("RATE_LIMIT_ENABLED", "True").lower() in ("true", "1", "t")

# Billing
TAX_RATE: Final[float] = float(os.getenv("TAX_RATE", "0.05"))
RESTAURANT_NAME: Final[str] = os.getenv("RESTAURANT_NAME", "Foody")

# Logging
LANG: Final[str] = os.getenv("LANG_CODE", "en")
LOGLEVEL: Final[str] = os.getenv("LOGLEVEL", "INFO").upper()
DEBUG: Final[bool] = os.getenv("DEBUG", "False").lower() in ("true", "1", "t", "True", "TRUE")  # Convert to boolean
