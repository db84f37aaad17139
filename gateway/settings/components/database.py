"""Relational store configuration.

Production runs on MariaDB (``DB_ENGINE=django.db.backends.mysql``);
SQLite is the zero-configuration default for development and tests.
"""

from gateway.settings.components import BASE_DIR, config

DATABASES = {
    'default': {
        'ENGINE': config('DB_ENGINE', default='django.db.backends.sqlite3'),
        'NAME': config('DB_NAME', default=str(BASE_DIR / 'gateway.sqlite3')),
        'USER': config('DB_USER', default=''),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default=''),
        'PORT': config('DB_PORT', default=''),
        'CONN_MAX_AGE': config('DB_CONN_MAX_AGE', cast=int, default=60),
    },
}
