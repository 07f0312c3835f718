import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-khanabuddy-demo-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["*"] if DEBUG else os.environ.get("DJANGO_ALLOWED_HOSTS", "").split(",")

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.staticfiles',
    'inventory',
    'orders',
    'dashboard',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
]

ROOT_URLCONF = 'khanabuddy.urls'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.environ.get("POSTGRES_DB", "khanabuddy"),
        'USER': os.environ.get("POSTGRES_USER", "postgres"),
        'PASSWORD': os.environ.get("POSTGRES_PASSWORD", ""),
        'HOST': os.environ.get("POSTGRES_HOST", "localhost"),
        'PORT': os.environ.get("POSTGRES_PORT", "5432"),
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Asia/Kolkata'
USE_TZ = True
STATIC_URL = 'static/'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_TASK_ALWAYS_EAGER = False

# Email (restock alerts)
EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.console.EmailBackend")
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "kitchen@khanabuddy.local")
RESTOCK_ALERT_EMAILS = [e for e in os.environ.get("RESTOCK_ALERT_EMAILS", "").split(",") if e]

# Storage keys, one JSON array per key
INVENTORY_STORAGE_KEY = "menu"
ACTIVE_ORDERS_STORAGE_KEY = "activeOrders"
DELIVERED_ORDERS_STORAGE_KEY = "deliveredOrders"
PENDING_PAYMENT_STORAGE_KEY = "orderData"

# Inventory rules
INVENTORY_DEFAULT_MIN_STOCK = 5
# one of: first, cheapest, highest_stock
INVENTORY_VARIANT_POLICY = os.environ.get("INVENTORY_VARIANT_POLICY", "first")
# None keeps the built-in table in inventory/resolver.py
INVENTORY_SYNONYMS = None

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'inventory': {'handlers': ['console'], 'level': os.environ.get("INVENTORY_LOG_LEVEL", "INFO")},
        'orders': {'handlers': ['console'], 'level': 'INFO'},
        'dashboard': {'handlers': ['console'], 'level': 'INFO'},
    },
}
