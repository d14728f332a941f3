# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/registry.py

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from mayaserver.api import labels as lbl
from mayaserver.errors import DuplicateRegistrationError, NotRegisteredError

log = logging.getLogger("mayaserver")

# factory(label, name) -> plugin instance
Factory = Callable[[str, str], Any]


class Registry:
    """
    Thread-safe name -> factory table.

    Built once at process start and handed to whoever needs it.
    There is no unregistration.
    """

    def __init__(self, kind: str, label: str):
        self.kind = kind
        self.label = label
        self._factories: Dict[str, Factory] = {}
        self._lock = threading.Lock()

    def register(self, name: str, factory: Factory) -> None:
        with self._lock:
            if name in self._factories:
                log.critical("%s '%s' was registered twice", self.kind, name)
                raise DuplicateRegistrationError(
                    f"{self.kind} '{name}' was registered twice"
                )
            self._factories[name] = factory
        log.debug("Registered %s '%s'", self.kind, name)

    def lookup(self, name: str) -> Tuple[Optional[Factory], bool]:
        with self._lock:
            factory = self._factories.get(name)
        return factory, factory is not None

    def get(self, name: str) -> Any:
        """
        Build the plugin registered under name.

        The factory runs outside the lock so a slow constructor
        does not block other lookups.
        """
        factory, found = self.lookup(name)
        if not found:
            raise NotRegisteredError(f"'{name}' is not registered as {self.kind}")
        return factory(self.label, name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._factories)


def new_orchestrator_registry() -> Registry:
    return Registry("orchestrator", lbl.OP_NAME_LBL)


def new_provisioner_registry() -> Registry:
    return Registry("volume provisioner", lbl.PVP_NAME_LBL)
