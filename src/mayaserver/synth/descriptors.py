# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/synth/descriptors.py
"""
Orchestrator-neutral shapes.

Descriptors go out to the cluster, records come back from it.
The kubernetes manifests module is the only place that maps them
onto client objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


# ---------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class PortDescriptor:
    container_port: int
    name: Optional[str] = None
    protocol: str = "TCP"


@dataclass(frozen=True)
class VolumeMountDescriptor:
    name: str
    mount_path: str


@dataclass(frozen=True)
class VolumeDescriptor:
    name: str
    host_path: str


@dataclass(frozen=True)
class ContainerDescriptor:
    name: str
    image: str
    command: List[str] = field(default_factory=list)
    args: List[str] = field(default_factory=list)
    ports: List[PortDescriptor] = field(default_factory=list)
    volume_mounts: List[VolumeMountDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class WorkloadDescriptor:
    name: str
    labels: Dict[str, str]
    pod_labels: Dict[str, str]
    container: ContainerDescriptor
    replicas: int = 1
    volume: Optional[VolumeDescriptor] = None


@dataclass(frozen=True)
class ServicePortDescriptor:
    name: str
    port: int
    protocol: str = "TCP"


@dataclass(frozen=True)
class ServiceDescriptor:
    name: str
    labels: Dict[str, str]
    selector: Dict[str, str]
    ports: List[ServicePortDescriptor] = field(default_factory=list)


# ---------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class WorkloadRecord:
    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    replicas: int = 0
    ready_replicas: int = 0
    # (type, status) pairs, e.g. ("Available", "True")
    conditions: Tuple[Tuple[str, str], ...] = ()
    args: List[str] = field(default_factory=list)

    def condition(self, ctype: str) -> Optional[str]:
        for t, status in self.conditions:
            if t == ctype:
                return status
        return None


@dataclass(frozen=True)
class ServiceRecord:
    name: str
    cluster_ip: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
