"""
Environment configuration for the revision tracker.
"""

import os
from dataclasses import dataclass, fields
from typing import List, Mapping, Optional

from dotenv import load_dotenv

LEETCODE_URL = "https://leetcode.com/graphql/"
LEETCODE_REFERER = "https://leetcode.com"
SUBMISSION_LIMIT = 50

# attribute -> environment variable
ENV_VARS = {
    'leetcode_session_cookie': 'LEETCODE_SESSION_COOKIE',
    'leetcode_csrf_token': 'LEETCODE_CSRF_TOKEN',
    'leetcode_username': 'LEETCODE_USERNAME',
    'google_client_id': 'GOOGLE_CLIENT_ID',
    'google_client_secret': 'GOOGLE_CLIENT_SECRET',
    'google_refresh_token': 'GOOGLE_REFRESH_TOKEN',
    'google_redirect_uri': 'GOOGLE_REDIRECT_URI',
}


class ConfigError(Exception):
    """Raised when required configuration is missing."""


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    leetcode_session_cookie: str = ''
    leetcode_csrf_token: str = ''
    leetcode_username: str = ''
    google_client_id: str = ''
    google_client_secret: str = ''
    google_refresh_token: str = ''
    google_redirect_uri: str = 'http://localhost:3000/oauth2callback'
    leetcode_url: str = LEETCODE_URL
    leetcode_referer: str = LEETCODE_REFERER
    calendar_id: str = 'primary'
    skip_easy: bool = True
    exact_line_match: bool = False
    submission_limit: int = SUBMISSION_LIMIT
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment, reading a .env file first when present."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        values = {}
        for attr, var in ENV_VARS.items():
            if environ.get(var):
                values[attr] = environ[var]

        if environ.get('GOOGLE_CALENDAR_ID'):
            values['calendar_id'] = environ['GOOGLE_CALENDAR_ID']
        if environ.get('LOG_LEVEL'):
            values['log_level'] = environ['LOG_LEVEL'].upper()
        values['skip_easy'] = _as_bool(environ.get('SKIP_EASY'), True)
        values['exact_line_match'] = _as_bool(environ.get('EXACT_LINE_MATCH'), False)

        return cls(**values)

    def missing(self, *names: str) -> List[str]:
        """Return the environment variable names of empty required settings."""
        known = {f.name for f in fields(self)}
        missing = []
        for name in names:
            if name not in known:
                raise ValueError(f"Unknown setting: {name}")
            if not getattr(self, name):
                missing.append(ENV_VARS.get(name, name.upper()))
        return missing

    def require(self, *names: str) -> None:
        missing = self.missing(*names)
        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")
