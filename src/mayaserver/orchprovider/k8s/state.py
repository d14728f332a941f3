# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/orchprovider/k8s/state.py
"""
Folds the workloads and the controller service of a VSM into the
flat annotation map returned to callers.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Optional

from mayaserver.api import labels as lbl
from mayaserver.synth.descriptors import ServiceRecord, WorkloadRecord
from mayaserver.synth.jiva import controller_name, iqn
from mayaserver.utils.helpers import append_csv

STATUS_RUNNING = "Running"
STATUS_PENDING = "Pending"


def is_controller(vsm: str, workload_name: str) -> bool:
    return workload_name == controller_name(vsm)


def is_replica(vsm: str, workload_name: str) -> bool:
    pattern = re.escape(vsm + lbl.REPLICA_SUFFIX) + r"\d+"
    return re.fullmatch(pattern, workload_name) is not None


def workload_status(w: WorkloadRecord) -> str:
    return STATUS_RUNNING if w.condition("Available") == "True" else STATUS_PENDING


# ---------------------------------------------------------------------
# annotation setters
# ---------------------------------------------------------------------
def set_cluster_ip(annotations: Dict[str, str], svc: ServiceRecord) -> None:
    append_csv(annotations, lbl.CLUSTER_IPS_API_LBL, svc.cluster_ip)


def set_target_portal(annotations: Dict[str, str], svc: ServiceRecord) -> None:
    if not svc.cluster_ip:
        return
    append_csv(annotations, lbl.TARGET_PORTALS_API_LBL, f"{svc.cluster_ip}:{lbl.JIVA_ISCSI_PORT}")


def set_iqn(annotations: Dict[str, str], vsm: str) -> None:
    annotations[lbl.IQN_API_LBL] = iqn(vsm)


def set_controller_status(annotations: Dict[str, str], w: WorkloadRecord) -> None:
    append_csv(annotations, lbl.CONTROLLER_STATUS_API_LBL, workload_status(w))


def set_replica_status(annotations: Dict[str, str], w: WorkloadRecord) -> None:
    append_csv(annotations, lbl.REPLICA_STATUS_API_LBL, workload_status(w))


def set_volume_size(annotations: Dict[str, str], w: WorkloadRecord) -> None:
    """
    The size sits at a fixed position of the replica launch args,
    second from the end. Shorter arg lists carry no size.
    """
    if len(w.args) < 2:
        return
    annotations.setdefault(lbl.VOLUME_SIZE_API_LBL, w.args[-2])


def synthesize(
    vsm: str,
    workloads: Iterable[WorkloadRecord],
    service: Optional[ServiceRecord],
) -> Dict[str, str]:
    """
    Returns a fresh annotation map. Workloads that are neither the
    controller nor a replica of this VSM are ignored.
    """
    annotations: Dict[str, str] = {}
    replica_count = 0
    saw_replica = False

    for w in workloads:
        if is_controller(vsm, w.name):
            set_controller_status(annotations, w)
        elif is_replica(vsm, w.name):
            saw_replica = True
            replica_count += w.replicas
            set_volume_size(annotations, w)
            set_replica_status(annotations, w)

    if saw_replica:
        annotations[lbl.REPLICA_COUNT_API_LBL] = str(replica_count)
        set_iqn(annotations, vsm)

    if service is not None:
        set_cluster_ip(annotations, service)
        set_target_portal(annotations, service)

    return annotations
