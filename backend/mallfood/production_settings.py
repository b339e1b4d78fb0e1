"""
Production settings for the mall marketplace API.
Select with DJANGO_SETTINGS_MODULE=mallfood.production_settings.
"""
import os
import dj_database_url
from .settings import *  # Import everything from base settings

# =====================
# Security Settings
# =====================
DEBUG = os.environ.get('DEBUG', 'False') == 'True'
SECRET_KEY = os.environ['SECRET_KEY']

ALLOWED_HOSTS = [host for host in os.environ.get('ALLOWED_HOSTS', '').split(',') if host]

# =====================
# Database (PostgreSQL, required)
# =====================
DATABASES = {
    'default': dj_database_url.config(
        default=os.environ['DATABASE_URL'],
        conn_max_age=600,
        ssl_require=True
    )
}

# =====================
# CORS
# =====================
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [origin for origin in os.environ.get('CORS_ALLOWED_ORIGINS', '').split(',') if origin]
CSRF_TRUSTED_ORIGINS = CORS_ALLOWED_ORIGINS

# =====================
# Payments & Push
# =====================
STRIPE_SECRET_KEY = os.environ['STRIPE_SECRET_KEY']
PUSH_NOTIFICATION_TIMEOUT = int(os.environ.get('PUSH_NOTIFICATION_TIMEOUT', '5'))

# =====================
# Static Files
# =====================
MIDDLEWARE.insert(1, 'whitenoise.middleware.WhiteNoiseMiddleware')
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}

# =====================
# Logging (Console-only)
# =====================
LOGGING['root']['level'] = 'INFO'
LOGGING['handlers']['console']['level'] = 'INFO'
LOGGING['loggers']['marketplace']['level'] = os.environ.get('MARKETPLACE_LOG_LEVEL', 'INFO')

# =====================
# Throttling
# =====================
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {
    'anon': '200/hour',
    'user': '10000/day',
}

# =====================
# Production Security Headers
# =====================
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True
X_FRAME_OPTIONS = 'DENY'
