from __future__ import annotations

import threading
from typing import Dict, Optional

from osslgate.authz.policy import PolicyDescriptor, compile_policy, creator_key, owner_key
from osslgate.core.config import ConfigSource


class PolicyCache:
    """
    Compiled policies keyed by function name.

    Lookups are lock-free. On a miss the policy is compiled outside the lock and inserted
    first-write-wins: two threads may both compile the same function, but every caller gets
    the descriptor that was registered first. Entries are never replaced or evicted.
    """

    def __init__(self, config: ConfigSource):
        self._config = config
        self._entries: Dict[str, PolicyDescriptor] = {}
        self._lock = threading.Lock()

    def get_or_compile(self, operation: str) -> PolicyDescriptor:
        perms = self._entries.get(operation)
        if perms is not None:
            return perms

        perms = compile_policy(
            operation,
            self._config.get_string(owner_key(operation), ""),
            self._config.get_string(creator_key(operation), ""),
        )
        with self._lock:
            return self._entries.setdefault(operation, perms)

    def peek(self, operation: str) -> Optional[PolicyDescriptor]:
        return self._entries.get(operation)

    def __contains__(self, operation: object) -> bool:
        return operation in self._entries

    def __len__(self) -> int:
        return len(self._entries)
