import os
from dotenv import load_dotenv
load_dotenv()

APP_NAME = "Health Education Quiz Service"
APP_VERSION = "1.0.0"

SECRET_KEY = os.getenv("SECRET_KEY", "secret123")
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/health_edu_db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Bearer tokens
TOKEN_MAX_AGE = int(os.getenv("TOKEN_MAX_AGE", 30 * 24 * 3600))
TOKEN_SALT = "auth-token"

# Seeded administrator
DEFAULT_ADMIN_NAME = os.getenv("DEFAULT_ADMIN_NAME", "Administrator")
DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@example.com")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")

# Content
MATERIAL_CATEGORIES = ("diabetes", "hypertension", "obesity", "heart")
DEFAULT_MATERIAL_IMAGE = "no-photo.jpg"
RECENT_ACTIVITY_LIMIT = int(os.getenv("RECENT_ACTIVITY_LIMIT", 5))

# Password reset throttling
PASSWORD_RESET_MAX_ATTEMPTS = 3
PASSWORD_RESET_WINDOW = 60 * 60

# Email
MAIL_ENABLED = os.getenv("MAIL_ENABLED", "false").lower() in ("1", "true", "yes")
MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
MAIL_PORT = int(os.getenv("MAIL_PORT", 587))
MAIL_USE_TLS = True
MAIL_USERNAME = os.getenv("MAIL_USERNAME")
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", MAIL_USERNAME)
