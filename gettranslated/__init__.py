"""
GetTranslated - live string translation for client applications.

Resolves the user's language against the languages a project supports,
fetches translations on demand and keeps a local cache warm.

Usage:
    from gettranslated import GetTranslated, InitOptions
    
    client = GetTranslated()
    await client.initialize("api-key", options=InitOptions.with_server_url("http://localhost:8000"))
    
    text = client.get_dynamic_string("Hello world")
"""

from gettranslated.client import GetTranslated
from gettranslated.config import SDK_VERSION, InitOptions, Settings, get_settings
from gettranslated.core.errors import (
    GetTranslatedError,
    HttpError,
    NetworkError,
    ParseError,
    ValidationError,
)
from gettranslated.core.events import (
    LanguageListeners,
    Subscription,
    get_language_listeners,
    reset_language_listeners,
)
from gettranslated.core.log import LogLevel, configure_logging
from gettranslated.core.results import Failure, Result, ResultCallback, Success

__version__ = "1.0.0"

__all__ = [
    # Client
    "GetTranslated",
    "InitOptions",
    "Settings",
    "get_settings",
    "SDK_VERSION",
    # Results and errors
    "Result",
    "ResultCallback",
    "Success",
    "Failure",
    "GetTranslatedError",
    "HttpError",
    "NetworkError",
    "ParseError",
    "ValidationError",
    # Language change listeners
    "LanguageListeners",
    "Subscription",
    "get_language_listeners",
    "reset_language_listeners",
    # Logging
    "LogLevel",
    "configure_logging",
]
