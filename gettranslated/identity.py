"""
User identity bookkeeping.

Resolves the user id for a new session: a caller-supplied id, or an
anonymous id that is generated once and reused until logout.
"""

from __future__ import annotations

import logging

from gettranslated.core.utils import generate_anonymous_id
from gettranslated.storage.keys import SdkState

logger = logging.getLogger(__name__)


class IdentityManager:
    """Owns the persisted anonymous user id."""
    
    def __init__(self, state: SdkState, app_package: str):
        self.state = state
        self.app_package = app_package
    
    def resolve_user_id(self, supplied_user_id: str | None = None) -> tuple[str, bool]:
        """
        Resolve the user id for a session.
        
        Returns:
            Tuple of (user_id, is_anonymous)
        """
        if supplied_user_id is not None and supplied_user_id.strip():
            return supplied_user_id.strip(), False
        
        user_id = self.state.get_stored_user_id()
        if user_id:
            logger.debug(f"Reusing anonymous user id {user_id}")
        else:
            user_id = generate_anonymous_id(self.app_package)
            self.state.store_user_id(user_id)
            logger.debug(f"Generated anonymous user id {user_id}")
        return user_id, True
    
    def forget_anonymous_id(self) -> None:
        """Drop the persisted anonymous id so the next one is freshly generated."""
        self.state.remove_stored_user_id()
