"""
GetTranslated client.

The client owns the active session and orchestrates initialization,
identity changes, string translation and background sync.

Usage:
    client = GetTranslated()

    result = await client.initialize("api-key")
    if not result.ok:
        print(result.code, result.message)

    # Returns immediately: cached translation, or the original text while
    # the translation is fetched in the background
    label = client.get_dynamic_string("Hello", callback=on_translation)

    await client.login("user@example.com")
    await client.logout()

Concurrency:
    ``initialize``, ``login`` and ``logout`` replace the session and are
    serialized by an ``asyncio.Lock``. Background work (translation
    fetches, sync, login notifications) runs as tasks on the event loop;
    each task checks that its session is still the active one before
    touching state or calling back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine

from gettranslated.config import Endpoints, InitOptions, SDK_VERSION, Settings, get_settings
from gettranslated.core.errors import GetTranslatedError, ParseError, ValidationError, error_info
from gettranslated.core.events import (
    LanguageListener,
    LanguageListeners,
    Subscription,
    get_language_listeners,
)
from gettranslated.core.log import LogLevel, configure_logging, parse_log_level
from gettranslated.core.models import InitResponse, SyncResponse, TranslationResponse, parse_response
from gettranslated.core.results import Failure, Result, ResultCallback, Success, deliver
from gettranslated.core.utils import now_millis
from gettranslated.i18n.cache import TranslationCache
from gettranslated.i18n.languages import DEFAULT_LANGUAGE, detect_device_language, resolve_language
from gettranslated.identity import IdentityManager
from gettranslated.integrations.gateway import NetworkGateway
from gettranslated.session import Session
from gettranslated.storage.base import KeyValueStore
from gettranslated.storage.keys import SdkState
from gettranslated.storage.local import create_store

logger = logging.getLogger(__name__)

NOT_INITIALIZED = "Not initialized"
SDK_NOT_INITIALIZED = "GetTranslated SDK has not been initialized"
EMPTY_USER_ID = "User id cannot be null or empty"
EMPTY_API_KEY = "API key cannot be empty"
NO_EVENT_LOOP = "No running event loop for background request"


class GetTranslated:
    """
    Client-side localization SDK.

    Collaborators are injectable for tests and embedding: the key-value
    store, the network gateway, the language listener registry and the
    device language source.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        store: KeyValueStore | None = None,
        gateway: NetworkGateway | None = None,
        listeners: LanguageListeners | None = None,
        device_language=None,
    ):
        self.settings = settings or get_settings()
        self.store = store if store is not None else create_store(self.settings.storage_path)
        self.state = SdkState(self.store)
        self.cache = TranslationCache(self.store)
        self.identity = IdentityManager(self.state, self.settings.app_package)
        self.gateway = gateway or NetworkGateway(
            self.settings.base_url,
            timeout=self.settings.request_timeout,
        )
        self.listeners = listeners if listeners is not None else get_language_listeners()
        self.device_language = device_language or detect_device_language

        self._session: Session | None = None
        self._lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._tasks: set[asyncio.Task] = set()

    # =========================================================================
    # State
    # =========================================================================

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def user_id(self) -> str | None:
        return self._session.user_id if self._session else None

    def is_initialized(self) -> bool:
        """Whether the active session has processed an init response."""
        return self._session is not None and self._session.initialized

    def get_languages(self) -> set[str]:
        """Supported language codes (empty before the first session)."""
        if self._session is None:
            return set()
        return set(self._session.supported_languages)

    def get_current_language(self) -> str:
        """Active language, or "en" when there is no session."""
        if self._session is None:
            return DEFAULT_LANGUAGE
        return self._session.language

    def reset(self) -> None:
        """Discard the active session (useful for testing)."""
        self._session = None

    # =========================================================================
    # Initialization
    # =========================================================================

    async def initialize(
        self,
        api_key: str | None = None,
        user_id: str | None = None,
        log_level: str | LogLevel | None = None,
        options: InitOptions | None = None,
        callback: ResultCallback | None = None,
    ) -> Result:
        """
        Initialize the SDK.

        Args:
            api_key: API key (defaults to ``Settings.api_key``)
            user_id: Optional user id; anonymous when empty
            log_level: Log level (defaults to ``Settings.log_level``)
            options: Optional server URL override
            callback: Receives the same result that is returned

        Returns:
            ``Success()`` or ``Failure(code, message)``; code is the HTTP
            status, or 0 for network and parse errors
        """
        try:
            level = parse_log_level(log_level or self.settings.log_level)
        except ValueError as e:
            return self._reject(callback, ValidationError(str(e)))

        if options is not None:
            self.gateway.set_server_url(options.server_url)

        async with self._lock:
            self._loop = asyncio.get_running_loop()
            current = self._session

            if current is not None and current.initialized:
                logger.warning("GetTranslated: Already initialized")
                return deliver(callback, Success())

            if current is not None:
                logger.debug("GetTranslated: Clearing previous failed initialization attempt")
                self._session = None

            configure_logging(level)

            key = (api_key if api_key is not None else self.settings.api_key).strip()
            if not key:
                return self._reject(callback, ValidationError(EMPTY_API_KEY))

            session = self._create_session(key, user_id)
            self._session = session
            return await self._perform_initialization(session, callback)

    def _create_session(self, api_key: str, user_id: str | None) -> Session:
        resolved_id, is_anonymous = self.identity.resolve_user_id(user_id)
        session = Session(
            user_id=resolved_id,
            is_anonymous_user_id=is_anonymous,
            api_key=api_key,
            language=self.device_language(),
            app_name=self.state.get_app_name() or "",
        )
        logger.info(f"User id {resolved_id}")
        return session

    async def _perform_initialization(
        self,
        session: Session,
        callback: ResultCallback | None,
        fallback: Session | None = None,
    ) -> Result:
        payload: dict[str, Any] = {
            "userId": session.user_id,
            "lang": session.language,
            "version": SDK_VERSION,
        }
        if session.app_name:
            payload["app_name"] = session.app_name
        if self.settings.app_package:
            payload["app_package"] = self.settings.app_package

        try:
            data = await self.gateway.send(Endpoints.INIT, payload, session.api_key, session.app_name)
            response = parse_response(InitResponse, data)
        except GetTranslatedError as e:
            code, message = error_info(e)
            logger.error(f"GetTranslated: Initialization error code {code}: {message}")
            session.initialized = False

            # A failed login/logout leaves the previous healthy session in place
            if fallback is not None and fallback.initialized and self._session is session:
                logger.warning(f"Restoring previous session for {fallback.user_id}")
                self._session = fallback
                if fallback.is_anonymous_user_id:
                    self.state.store_user_id(fallback.user_id)

            return deliver(callback, Failure(code, message))

        if self._session is not session:
            logger.debug(f"Ignoring init response for replaced session {session.user_id}")
            return deliver(callback, Failure(0, "Session was replaced"))

        logger.debug(f"Init response {data}")
        self._apply_init_response(session, response)

        result = deliver(callback, Success())
        self.listeners.notify(session.language)
        self._spawn(self._sync(session))
        return result

    def _apply_init_response(self, session: Session, response: InitResponse) -> None:
        if response.project is not None:
            session.app_name = response.project
            self.state.store_app_name(response.project)

        if response.base_language:
            session.base_language = response.base_language

        if response.languages is not None:
            session.supported_languages = set(response.languages)

        # Base language never needs translation but is always selectable
        session.supported_languages.add(session.base_language)

        if response.language_override:
            self.state.set_server_language_override(session.user_id, response.language_override)
            session.supported_languages.add(response.language_override)
        else:
            self.state.remove_server_language_override(session.user_id)

        session.language = resolve_language(
            server_override=response.language_override,
            saved_preference=self.state.get_user_language_override(session.user_id),
            supported_languages=session.supported_languages,
            base_language=session.base_language,
            device_language=self.device_language(),
        )
        session.initialized = True

    # =========================================================================
    # User Management
    # =========================================================================

    async def login(self, user_id: str, callback: ResultCallback | None = None) -> Result:
        """
        Switch to an authenticated user id and re-initialize.

        Coming from an anonymous id, the server is told about the
        transition (fire-and-forget). Supported languages carry over until
        the new init response arrives.
        """
        async with self._lock:
            self._loop = asyncio.get_running_loop()
            previous = self._session

            if previous is None:
                return self._reject(callback, GetTranslatedError(SDK_NOT_INITIALIZED))

            trimmed = (user_id or "").strip()
            if not trimmed:
                return self._reject(callback, ValidationError(EMPTY_USER_ID))

            if trimmed == previous.user_id:
                logger.info(f"{trimmed} already logged in")
                return deliver(callback, Success())

            if previous.is_anonymous_user_id:
                self._spawn(self._notify_login(previous, trimmed))

            session = self._create_session(previous.api_key, trimmed)
            session.supported_languages = set(previous.supported_languages)
            self._session = session
            return await self._perform_initialization(session, callback, fallback=previous)

    async def logout(self, callback: ResultCallback | None = None) -> Result:
        """Return to a brand-new anonymous identity and re-initialize."""
        async with self._lock:
            self._loop = asyncio.get_running_loop()
            previous = self._session

            if previous is None:
                return self._reject(callback, GetTranslatedError(SDK_NOT_INITIALIZED))

            logger.info("Logging out and returning to anonymous user")
            self.identity.forget_anonymous_id()

            session = self._create_session(previous.api_key, None)
            session.supported_languages = set(previous.supported_languages)
            self._session = session
            return await self._perform_initialization(session, callback, fallback=previous)

    async def _notify_login(self, session: Session, login_user_id: str) -> None:
        payload: dict[str, Any] = {
            "userId": session.user_id,
            "loginUserId": login_user_id,
            "version": SDK_VERSION,
        }
        if session.app_name:
            payload["app_name"] = session.app_name

        try:
            await self.gateway.send(Endpoints.LOGIN, payload, session.api_key, session.app_name)
        except GetTranslatedError as e:
            logger.error(f"Login for {login_user_id} error: {e}")
            return
        logger.info(f"{login_user_id} logged in.")

    def _reject(self, callback: ResultCallback | None, error: GetTranslatedError) -> Result:
        logger.error(error.message)
        return deliver(callback, Failure.from_error(error))

    # =========================================================================
    # Language Management
    # =========================================================================

    def on_language_change(self, listener: LanguageListener) -> Subscription:
        """Register a listener called with the new language code."""
        return self.listeners.subscribe(listener)

    def off_language_change(self, target: Subscription | LanguageListener) -> None:
        """Unregister a subscription (or every subscription of a listener)."""
        self.listeners.unsubscribe(target)

    def set_language(self, language_code: str, persist: bool = True) -> bool:
        """
        Switch the active language.

        Ignored with a warning when the code is not supported. With
        ``persist`` the choice is saved as the user's preference.

        Returns:
            Whether the language was changed
        """
        session = self._session
        if session is None:
            logger.warning(NOT_INITIALIZED)
            return False

        if not session.supports(language_code):
            supported = ", ".join(sorted(session.supported_languages))
            logger.warning(f"{language_code} is not one of {supported}")
            return False

        logger.info(f"Setting language to: {language_code}")
        session.language = language_code

        if persist:
            logger.debug(f"Saving language preference: {language_code}")
            self.state.set_user_language_override(session.user_id, language_code)

        self.listeners.notify(language_code)

        if session.initialized:
            self._spawn(self._sync(session))
        return True

    # =========================================================================
    # Translation
    # =========================================================================

    def get_dynamic_string(self, text: str, callback: ResultCallback | None = None) -> str:
        """
        Translate ``text`` without blocking.

        Returns the cached translation when there is one, otherwise the
        original text. On a cache miss the translation is fetched in the
        background, cached, and handed to ``callback``; it is never the
        return value of this call.
        """
        if not text or not text.strip():
            logger.warning("Empty or whitespace-only text provided for translation")
            return text

        session = self._session
        if session is None:
            logger.warning(NOT_INITIALIZED)
            deliver(callback, Failure(0, NOT_INITIALIZED))
            return text

        if session.is_in_base_language():
            deliver(callback, Success(text))
            return text

        language = session.language
        cached = self.cache.get(language, text)
        if cached is not None:
            deliver(callback, Success(cached))
            return cached

        if not self._spawn(self._fetch_translation(session, language, text, callback)):
            deliver(callback, Failure(0, NO_EVENT_LOOP))
        return text

    async def _fetch_translation(
        self,
        session: Session,
        language: str,
        text: str,
        callback: ResultCallback | None,
    ) -> None:
        payload: dict[str, Any] = {
            "text": text,
            "lang": language,
            "version": SDK_VERSION,
        }
        if session.app_name:
            payload["app_name"] = session.app_name

        try:
            data = await self.gateway.send(Endpoints.TRANSLATE, payload, session.api_key, session.app_name)
            response = parse_response(TranslationResponse, data)
            if not response.translation:
                raise ParseError("Empty translation response")
        except GetTranslatedError as e:
            if self._session is not session:
                return
            logger.error(f"Translation error: {e}")
            deliver(callback, Failure(e.code, str(e)))
            return

        if self._session is not session:
            logger.debug(f"Dropping translation for replaced session {session.user_id}")
            return

        self.cache.put(language, text, response.translation)
        deliver(callback, Success(response.translation))

    # =========================================================================
    # Sync
    # =========================================================================

    async def sync_translations(self) -> None:
        """Fetch translations updated since the last sync into the cache."""
        session = self._session
        if session is None:
            logger.warning(NOT_INITIALIZED)
            return
        await self._sync(session)

    async def _sync(self, session: Session) -> None:
        if session.is_in_base_language():
            return

        language = session.language
        last_sync = self.state.get_last_sync(language)
        started_at = now_millis()

        payload: dict[str, Any] = {
            "lang": language,
            "version": SDK_VERSION,
            "last_sync": last_sync,
        }
        if session.app_name:
            payload["app_name"] = session.app_name

        try:
            data = await self.gateway.send(Endpoints.SYNC, payload, session.api_key, session.app_name)
            response = parse_response(SyncResponse, data)
        except GetTranslatedError as e:
            # Background refresh: log only
            logger.error(f"Sync error: {e}")
            return

        if self._session is not session:
            logger.debug(f"Dropping sync response for replaced session {session.user_id}")
            return

        logger.debug(f"Sync response {data}")
        self.state.set_last_sync(language, started_at)

        entries = response.entries()
        for entry in entries:
            self.cache.put(entry.lang, entry.string, entry.translation)
        logger.debug(f"Synced {len(entries)} translations for {language}")

    # =========================================================================
    # Background Tasks
    # =========================================================================

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> bool:
        """
        Schedule a background coroutine.

        Runs on the current event loop, or on the loop the client was
        initialized on when called from another thread. Returns False
        (and discards the coroutine) when neither is available.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            self._create_task(coro)
            return True

        loop = self._loop
        if loop is not None and loop.is_running():
            try:
                loop.call_soon_threadsafe(self._create_task, coro)
                return True
            except RuntimeError:
                pass

        coro.close()
        logger.warning(NO_EVENT_LOOP)
        return False

    def _create_task(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background task failed", exc_info=task.exception())

    async def wait_for_pending(self) -> None:
        """Wait until all background requests have completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
