"""
Session state.

A session is one user identity talking to one project. It is created by
``initialize``, ``login`` and ``logout`` and replaced wholesale by the
next of those calls; the client only ever holds one.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gettranslated.i18n.languages import DEFAULT_LANGUAGE


@dataclass(eq=False)
class Session:
    """
    State of the active identity.
    
    ``supported_languages`` may be carried over from the previous session
    as a provisional value until this session's init response lands.
    """
    
    user_id: str
    is_anonymous_user_id: bool
    api_key: str
    language: str
    
    app_name: str = ""
    base_language: str = DEFAULT_LANGUAGE
    supported_languages: set[str] = field(default_factory=set)
    initialized: bool = False
    
    def is_in_base_language(self) -> bool:
        """True when no translation is needed (also before initialization)."""
        if not self.initialized:
            return True
        return self.language == self.base_language
    
    def supports(self, language: str) -> bool:
        """Whether ``language`` may be selected. An empty set allows anything."""
        return not self.supported_languages or language in self.supported_languages
