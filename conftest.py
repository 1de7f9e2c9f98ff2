# Test environment defaults; must be set before service settings are imported
import os

os.environ.setdefault("CHECKOUT_PHONE_NUMBER", "919876543210")
os.environ.setdefault("CART_TTL_SECONDS", "0")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_PRODUCTS", "false")
os.environ.setdefault("LOG_TIMEZONE", "Asia/Kolkata")
