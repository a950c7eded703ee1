"""
Language change notifications.

Listeners live in a registry that is independent of any session, so a
listener registered before ``login``/``logout``/re-initialization keeps
receiving notifications afterwards. Only explicit unsubscription removes it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

# Called with the new language code
LanguageListener = Callable[[str], None]


@dataclass(eq=False)
class Subscription:
    """Handle returned by ``subscribe``; dispose it to stop notifications."""
    
    listener: LanguageListener
    registry: LanguageListeners | None = field(default=None, repr=False)
    
    @property
    def active(self) -> bool:
        return self.registry is not None and self in self.registry._subscriptions
    
    def dispose(self) -> None:
        if self.registry is not None:
            self.registry.unsubscribe(self)


class LanguageListeners:
    """Ordered registry of language change listeners."""
    
    def __init__(self):
        self._subscriptions: list[Subscription] = []
    
    def __len__(self) -> int:
        return len(self._subscriptions)
    
    def subscribe(self, listener: LanguageListener) -> Subscription:
        """Register a listener. Returns the subscription (used to unsubscribe)."""
        subscription = Subscription(listener=listener, registry=self)
        self._subscriptions.append(subscription)
        return subscription
    
    def unsubscribe(self, target: Subscription | LanguageListener) -> None:
        """Remove a subscription, or every subscription of a listener."""
        if isinstance(target, Subscription):
            if target in self._subscriptions:
                self._subscriptions.remove(target)
            return
        self._subscriptions = [s for s in self._subscriptions if s.listener != target]
    
    def notify(self, language: str) -> None:
        """Call every listener in registration order."""
        for subscription in list(self._subscriptions):
            try:
                subscription.listener(language)
            except Exception:
                # One failing listener must not starve the others
                logger.exception(f"Error in language change listener for {language}")

# Process-wide registry shared by every client
_default_listeners: LanguageListeners | None = None


def get_language_listeners() -> LanguageListeners:
    """Get the process-wide listener registry."""
    global _default_listeners
    if _default_listeners is None:
        _default_listeners = LanguageListeners()
    return _default_listeners


def reset_language_listeners() -> None:
    """Reset the process-wide registry (useful for testing)."""
    global _default_listeners
    _default_listeners = None
