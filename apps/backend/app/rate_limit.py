"""
IP-based rate limiting for public endpoints.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import Settings

# Callables, so slowapi resolves the limit from the environment on each request
RATE_LIMIT_SEARCH = Settings.rate_limit_search
RATE_LIMIT_SUBMIT = Settings.rate_limit_submit
RATE_LIMIT_LOGIN = Settings.rate_limit_login

limiter = Limiter(key_func=get_remote_address)
