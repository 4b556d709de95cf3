import threading
from contextlib import nullcontext
from typing import Dict

class TenantLocks:
    """
    Optional per-tenant serialization of load-mutate-persist cycles.

    Disabled by default: index and config writes are last-writer-wins and two
    concurrent updates to one tenant can drop each other's changes. When
    enabled, the lock only covers threads of this process.

    One lock is kept per tenant key for the life of the process; keys come from
    request headers, so the table grows with the number of distinct tenants seen.
    """
    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def hold(self, tenant: str):
        if not self.enabled:
            return nullcontext()
        with self._guard:
            lock = self._locks.setdefault(tenant, threading.Lock())
        return lock
