"""In-memory registry of wizard sessions."""

import logging
import secrets
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Optional

from tprm_wizard.config import settings
from tprm_wizard.services.wizard_store import WizardStore

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Holds one WizardStore per session, least recently used first."""

    def __init__(
        self,
        max_sessions: Optional[int] = None,
        session_ttl_hours: Optional[int] = None,
        seed_initial_scenario: Optional[bool] = None,
    ):
        self.max_sessions = (
            settings.max_sessions if max_sessions is None else max_sessions
        )
        self.session_ttl_hours = (
            settings.session_ttl_hours
            if session_ttl_hours is None
            else session_ttl_hours
        )
        self.seed_initial_scenario = (
            settings.seed_initial_scenario
            if seed_initial_scenario is None
            else seed_initial_scenario
        )
        # session_id -> store, ordered by last access
        self._stores: OrderedDict[str, WizardStore] = OrderedDict()
        self._last_seen: dict[str, datetime] = {}

    def _generate_session_id(self) -> str:
        """Generate cryptographically secure session ID."""
        return secrets.token_hex(16)

    def _touch(self, session_id: str) -> None:
        self._stores.move_to_end(session_id)
        self._last_seen[session_id] = datetime.utcnow()

    def create(self) -> tuple[str, WizardStore]:
        """Start a new wizard session."""
        self.cleanup_expired_sessions()

        while self._stores and len(self._stores) >= self.max_sessions:
            evicted_id, _ = self._stores.popitem(last=False)
            self._last_seen.pop(evicted_id, None)
            logger.info("Evicted least recently used session %s", evicted_id)

        session_id = self._generate_session_id()
        store = WizardStore(seed_initial_scenario=self.seed_initial_scenario)
        self._stores[session_id] = store
        self._touch(session_id)
        logger.info("Created wizard session %s", session_id)
        return session_id, store

    def get(self, session_id: str) -> Optional[WizardStore]:
        store = self._stores.get(session_id)
        if store is not None:
            self._touch(session_id)
        return store

    def delete(self, session_id: str) -> bool:
        store = self._stores.pop(session_id, None)
        self._last_seen.pop(session_id, None)
        if store is not None:
            logger.info("Deleted wizard session %s", session_id)
        return store is not None

    def cleanup_expired_sessions(self, max_age_hours: Optional[int] = None) -> int:
        """Drop sessions not accessed within max_age_hours."""
        max_age = max_age_hours if max_age_hours is not None else self.session_ttl_hours
        cutoff = datetime.utcnow() - timedelta(hours=max_age)
        expired = [
            session_id
            for session_id, last_seen in self._last_seen.items()
            if last_seen < cutoff
        ]
        for session_id in expired:
            self._stores.pop(session_id, None)
            self._last_seen.pop(session_id, None)

        if expired:
            logger.info("Cleaned up %d expired wizard sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._stores


# Global session registry instance
session_registry = SessionRegistry()
