# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/volumeprovisioner/jiva.py

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from mayaserver.api import labels as lbl
from mayaserver.api.models import Claim, VsmProfile
from mayaserver.errors import UnsupportedOperationError, ValidationError
from mayaserver.orchprovider.interface import StorageOps
from mayaserver.profile.resolver import ProfileResolver
from mayaserver.registry import Registry

log = logging.getLogger("mayaserver")


class JivaProvisioner:
    """
    Volume provisioner for jiva VSMs.

    Resolves the claim, picks the orchestrator named by the profile
    and hands the storage operation over to it.
    """

    def __init__(
        self,
        label: str,
        name: str,
        *,
        orchestrators: Registry,
        resolver: Optional[ProfileResolver] = None,
    ):
        if not label:
            raise ValidationError("Label not found while building jiva provisioner")
        if not name:
            raise ValidationError("Name not found while building jiva provisioner")

        self.label = label
        self.name = name
        self.orchestrators = orchestrators
        self.resolver = resolver or ProfileResolver()

    def _ops(self, orchestrator: str) -> StorageOps:
        orch = self.orchestrators.get(orchestrator)
        ops, supported = orch.storage_ops()
        if not supported:
            raise UnsupportedOperationError(
                f"Storage operations not supported by '{orch.label}:{orch.name}'"
            )
        return ops

    def profile(self, claim: Claim) -> VsmProfile:
        return self.resolver.resolve(claim)

    def add(self, claim: Claim) -> Dict[str, str]:
        profile = self.profile(claim)
        log.info("Adding VSM '%s' via %s", profile.vsm, profile.orchestrator)
        return self._ops(profile.orchestrator).add_storage(profile)

    def read(self, claim: Claim) -> Dict[str, str]:
        profile = self.profile(claim)
        return self._ops(profile.orchestrator).read_storage(profile)

    def delete(self, claim: Claim) -> List[str]:
        profile = self.profile(claim)
        log.info("Deleting VSM '%s' via %s", profile.vsm, profile.orchestrator)
        return self._ops(profile.orchestrator).delete_storage(profile)

    def list(
        self,
        namespace: str = lbl.DEFAULT_NAMESPACE,
        *,
        orchestrator: str = lbl.K8S_ORCHESTRATOR,
        in_cluster: bool = True,
    ) -> List[str]:
        return self._ops(orchestrator).list_storage(namespace, in_cluster=in_cluster)
