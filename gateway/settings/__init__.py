"""Settings entry point.

Settings are split into components and merged with ``django-split-settings``.
Every value can be overridden from the environment or ``config/.env``.
"""

from split_settings.tools import include, optional

include(
    'components/common.py',
    'components/database.py',
    'components/logging.py',
    'components/storages.py',
    'components/gateway.py',
    # Local overrides, never committed:
    optional('environments/local.py'),
)
