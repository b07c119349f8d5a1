from __future__ import annotations

import threading
from typing import Any, Dict, List


class _CountingConfig:
    def __init__(self, values: Dict[str, str]):
        self.values = values
        self.reads: List[str] = []

    def get_string(self, key: str, default: str = "") -> str:
        self.reads.append(key)
        return self.values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return default


def test_compiles_once_then_serves_from_cache() -> None:
    from osslgate.authz.cache import PolicyCache
    from osslgate.authz.policy import GrantCategory

    cfg = _CountingConfig({"Allow_osNpcSay": "GOD"})
    cache = PolicyCache(cfg)

    assert "osNpcSay" not in cache
    assert cache.peek("osNpcSay") is None

    first = cache.get_or_compile("osNpcSay")
    second = cache.get_or_compile("osNpcSay")
    assert first is second
    assert first.grants == GrantCategory.GOD
    assert cfg.reads == ["Allow_osNpcSay", "Creators_osNpcSay"]
    assert len(cache) == 1
    assert cache.peek("osNpcSay") is first


def test_unconfigured_functions_get_threat_level_policy() -> None:
    from osslgate.authz.cache import PolicyCache
    from osslgate.core.config import MappingConfigSource

    cache = PolicyCache(MappingConfigSource({}))
    assert cache.get_or_compile("osDie").by_threat_level is True


def test_concurrent_first_use_converges_on_one_descriptor(monkeypatch) -> None:
    import osslgate.authz.cache as cache_mod
    from osslgate.authz.cache import PolicyCache
    from osslgate.core.config import MappingConfigSource

    n = 8
    barrier = threading.Barrier(n)
    compiled: List[Any] = []
    real_compile = cache_mod.compile_policy

    def _slow_compile(*args: Any):
        # Hold every thread inside compilation so they all miss the cache.
        perms = real_compile(*args)
        compiled.append(perms)
        barrier.wait(timeout=5)
        return perms

    monkeypatch.setattr(cache_mod, "compile_policy", _slow_compile)
    cache = PolicyCache(MappingConfigSource({"Allow_osTeleportAgent": "ESTATE_OWNER,GOD"}))

    results: List[Any] = [None] * n

    def _worker(i: int) -> None:
        results[i] = cache.get_or_compile("osTeleportAgent")

    threads = [threading.Thread(target=_worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(compiled) == n
    assert all(r is results[0] for r in results)
    assert cache.peek("osTeleportAgent") is results[0]
    assert all(c == results[0] for c in compiled)
    assert len(cache) == 1
