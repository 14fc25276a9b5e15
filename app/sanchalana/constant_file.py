import os
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# Database
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", 5432)
DB_NAME = os.getenv("DB_NAME", "sanchalana")
DATABASE_URL = os.getenv("DATABASE_URL")

# Tokens and passwords
secret_key = os.getenv("SECRET_KEY", "sanchalana-dev-secret-change-me")
jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))
bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", 12))

# Mail (one-time codes)
sanchalana_email = os.getenv("SMTP_EMAIL", "")
sanchalana_email_password = os.getenv("SMTP_PASSWORD", "")
smtp_host = os.getenv("SMTP_HOST", "smtp.gmail.com")
smtp_port = int(os.getenv("SMTP_PORT", 587))
otp_sign_in_subject = "Your Sanchalana sign-in code"
otp_expire_minutes = int(os.getenv("OTP_EXPIRE_MINUTES", 5))
otp_max_attempts = int(os.getenv("OTP_MAX_ATTEMPTS", 5))

# File storage
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(BASE_DIR, "uploads"))
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "").rstrip("/")
storage_buckets = ("event_images", "qr_codes")
allowed_upload_extensions = {"png", "jpg", "jpeg", "gif", "webp", "svg"}

# Misc
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
