"""Persistence synchronizer: remote store first when configured, local store as fallback."""
import json
import logging
from typing import Optional

import httpx

from mealrota.domain.PlanningState import PlanningState
from mealrota.infra.Local_Store import LocalStore
from mealrota.infra.Remote_Store import RemoteStateClient
from mealrota.utilities.config import API_BASE
from mealrota.utilities.constants import AUTOSAVE_KEY

logger = logging.getLogger(__name__)


class StateRepository:
    """Two-tier load/save of the whole PlanningState.

    Neither operation raises: a failing remote tier (network error, non-2xx,
    unparsable body) silently falls through to the local tier, and unreadable
    local content reads as "no data". There is no retry and no conflict
    detection, the last completed write wins.
    """

    def __init__(self, remote: Optional[RemoteStateClient] = None, local: Optional[LocalStore] = None,
                 key: str = AUTOSAVE_KEY):
        self.remote = remote
        self.local = local or LocalStore()
        self.key = key

    @property
    def has_remote(self) -> bool:
        return self.remote is not None

    def load(self) -> Optional[PlanningState]:
        if self.remote is not None:
            try:
                data = self.remote.fetch()
                if isinstance(data, dict):
                    return PlanningState.from_dict(data)
                logger.info("Remote store has no state; trying local store")
            except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
                logger.warning("Remote load failed, falling back to local store: %s", e)
        try:
            raw = self.local.get_item(self.key)
            return PlanningState.from_dict(json.loads(raw)) if raw else None
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Local state unparsable, ignoring it: %s", e)
            return None

    def save(self, state: PlanningState) -> bool:
        document = state.to_dict()
        if self.remote is not None:
            try:
                self.remote.store(document)
                return True
            except httpx.HTTPError as e:
                logger.warning("Remote save failed, falling back to local store: %s", e)
        try:
            self.local.set_item(self.key, json.dumps(document, ensure_ascii=False))
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Local save failed: %s", e)
            return False


def build_repository(api_base: str = API_BASE, local: Optional[LocalStore] = None) -> StateRepository:
    """Repository for the process configuration; the remote tier exists only if a base URL is set."""
    remote = RemoteStateClient(api_base) if api_base else None
    return StateRepository(remote=remote, local=local)


__all__ = ['StateRepository', 'build_repository']
