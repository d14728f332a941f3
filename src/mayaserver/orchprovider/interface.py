# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Tuple

from mayaserver.api.models import VsmProfile
from mayaserver.synth.descriptors import (
    ServiceDescriptor,
    ServiceRecord,
    WorkloadDescriptor,
    WorkloadRecord,
)


class ClusterClient(Protocol):
    """Verb-level access to one namespace of a cluster."""

    namespace: str

    def create_workload(self, desc: WorkloadDescriptor) -> WorkloadRecord: ...

    def list_workloads(self, selector: str) -> List[WorkloadRecord]: ...

    def delete_workload(self, name: str) -> bool: ...

    def create_service(self, desc: ServiceDescriptor) -> ServiceRecord: ...

    def get_service(self, name: str) -> Optional[ServiceRecord]: ...

    def delete_service(self, name: str) -> bool: ...


class StorageOps(Protocol):
    def add_storage(self, profile: VsmProfile) -> Dict[str, str]: ...

    def read_storage(self, profile: VsmProfile) -> Dict[str, str]: ...

    def delete_storage(self, profile: VsmProfile) -> List[str]: ...

    def list_storage(self, namespace: str, *, in_cluster: bool = True) -> List[str]: ...


class Orchestrator(Protocol):
    @property
    def label(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def region(self) -> str: ...

    def storage_ops(self) -> Tuple[Optional[StorageOps], bool]: ...
