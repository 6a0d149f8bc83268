from collections import Counter
from enum import Enum, auto
from innerpeace.core.logger import logger

class StorageState(Enum):
    UNKNOWN = auto()
    REMOTE = auto()
    LOCAL = auto()

class StorageStateTracker:
    """Remembers which replica last served each record kind.

    The remote store and the local fallback are never reconciled, so a
    switch between them means records written on one side are invisible
    on the other. Switches are logged so the divergence is observable.
    """

    def __init__(self):
        self._states: dict[str, StorageState] = {}
        self._fallbacks = Counter()

    def state(self, kind: str) -> StorageState:
        return self._states.get(kind, StorageState.UNKNOWN)

    def record(self, kind: str, new_state: StorageState):
        old_state = self.state(kind)
        if old_state != new_state:
            if old_state != StorageState.UNKNOWN:
                logger.warning(
                    "Storage path for {} changed: {} -> {}. Records on the previous path are not visible here.",
                    kind, old_state.name, new_state.name
                )
            self._states[kind] = new_state

    def record_fallback(self, kind: str):
        self._fallbacks[kind] += 1
        self.record(kind, StorageState.LOCAL)

    def fallback_count(self, kind: str) -> int:
        return self._fallbacks[kind]

    def is_remote(self, kind: str) -> bool:
        return self.state(kind) == StorageState.REMOTE

    def is_local(self, kind: str) -> bool:
        return self.state(kind) == StorageState.LOCAL

    def reset(self):
        self._states.clear()
        self._fallbacks.clear()
