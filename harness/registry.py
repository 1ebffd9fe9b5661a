"""
Kernel suite registry (suite name -> suite instance).

A simple in-process dict; built-in suites are imported on first lookup so
callers don't need to import a suite module just to register it.
"""

from __future__ import annotations

import importlib
from typing import Dict, List

from harness.interfaces import KernelSuite

_REGISTRY: Dict[str, KernelSuite] = {}

_BUILTIN = {
    "larfg": "harness.suites.larfg",
    "lacgv": "harness.suites.lacgv",
}


def register(suite: KernelSuite) -> None:
    _REGISTRY[suite.name] = suite


def get(name: str) -> KernelSuite:
    if name not in _REGISTRY:
        mod = _BUILTIN.get(name)
        if mod:
            importlib.import_module(mod)
    if name not in _REGISTRY:
        raise KeyError(f"kernel suite not registered: {name}")
    return _REGISTRY[name]


def names() -> List[str]:
    return sorted(set(_REGISTRY) | set(_BUILTIN))


__all__ = ["register", "get", "names"]
