from .settings import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
RESTOCK_ALERT_EMAILS = ["kitchen@example.com"]

INVENTORY_VARIANT_POLICY = "first"
