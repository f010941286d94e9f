import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME")

PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Checkout shipping: one flat rate inside the home district, another everywhere else
HOME_DISTRICT = os.getenv("HOME_DISTRICT", "Dhaka")


def _fee(name, default):
    value = float(os.getenv(name, default))
    return int(value) if value.is_integer() else value


HOME_SHIPPING_FEE = _fee("HOME_SHIPPING_FEE", "60")
OUTSIDE_SHIPPING_FEE = _fee("OUTSIDE_SHIPPING_FEE", "120")

UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(os.getcwd(), "public"))

RESEND_API_KEY = (os.getenv("RESEND_API_KEY") or "").strip()
MAIL_FROM = os.getenv("MAIL_FROM", "Rodela's Lifestyle <orders@rodela.com>")
ADMIN_NOTIFY_EMAIL = os.getenv("ADMIN_NOTIFY_EMAIL", "admin@rodela.com")

IMGBB_API_KEY = (os.getenv("IMGBB_API_KEY") or "").strip()
IMGBB_UPLOAD_URL = "https://api.imgbb.com/1/upload"

FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS")
ADMIN_EMAIL = (os.getenv("ADMIN_EMAIL") or "").strip().lower()
ADMIN_EMAIL_DOMAIN = os.getenv("ADMIN_EMAIL_DOMAIN", "rodela.com")
