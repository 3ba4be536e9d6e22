"""
Environment-driven configuration for the shop.

Values are read when load_config() is called, so a container can inject
DB_* variables right before the app factory runs.
"""

import os
from typing import Any, Dict, Mapping, MutableMapping, Optional

# VULNERABLE: credentials fall back to literals shipped in the image
DEFAULTS = {
    'DB_HOST': 'database',
    'DB_NAME': 'labdb',
    'DB_USER': 'labuser',
    'DB_PASS': 'labpass123',
    'DB_ENGINE': 'mysql',
    'SQLITE_PATH': 'vtcs_shop.db',
}


def _env(environ: Mapping[str, str], key: str) -> str:
    # unset and empty both fall back
    return environ.get(key) or DEFAULTS[key]


def apply_mysql_settings(config: MutableMapping[str, Any]) -> None:
    """Derive the flask_mysqldb keys from the DB_* values"""
    config['MYSQL_HOST'] = config['DB_HOST']
    config['MYSQL_DB'] = config['DB_NAME']
    config['MYSQL_USER'] = config['DB_USER']
    config['MYSQL_PASSWORD'] = config['DB_PASS']
    config['MYSQL_CURSORCLASS'] = 'DictCursor'


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Build the Flask config mapping from the environment"""
    if environ is None:
        environ = os.environ

    config = {key: _env(environ, key) for key in DEFAULTS}
    config['DB_ENGINE'] = config['DB_ENGINE'].lower()
    apply_mysql_settings(config)

    # VULNERABLE: session cookie readable from injected script
    config['SESSION_COOKIE_HTTPONLY'] = False

    return config
