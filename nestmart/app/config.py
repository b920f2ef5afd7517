import os


def _int_list(raw: str) -> list[int]:
    return [int(v) for v in raw.split(",") if v.strip()]


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")

    # Remote collaborators
    CATALOG_API_URL = os.getenv("CATALOG_API_URL", "https://dummyjson.com")
    AUTH_API_URL = os.getenv("AUTH_API_URL", "https://fdr-food-api.onrender.com/api")
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

    # Catalog paging
    DEFAULT_LIMIT = int(os.getenv("DEFAULT_LIMIT", "25"))
    MAX_LIMIT = int(os.getenv("MAX_LIMIT", "100"))
    LIMIT_CHOICES = _int_list(os.getenv("LIMIT_CHOICES", "25,50,75,100"))

    # Per-surface sizes
    CART_ID = int(os.getenv("CART_ID", "5"))
    CART_LIMIT = int(os.getenv("CART_LIMIT", "10"))
    RELATED_LIMIT = int(os.getenv("RELATED_LIMIT", "5"))
    POPULAR_LIMIT = int(os.getenv("POPULAR_LIMIT", "20"))
    BEST_SELL_SKIP = int(os.getenv("BEST_SELL_SKIP", "30"))

    # Opaque token from the auth API, never validated here
    AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "token")
    AUTH_COOKIE_MAX_AGE = int(os.getenv("AUTH_COOKIE_MAX_AGE", "3600"))

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))
