# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/synth/jiva.py
"""
Pure builders for the jiva controller, its service and the replicas.

Nothing here talks to a cluster; every function maps a VsmProfile
(plus the controller IP for replicas) onto descriptors.
"""

from __future__ import annotations

from typing import List

from mayaserver.api import labels as lbl
from mayaserver.api.models import VsmProfile
from mayaserver.errors import ValidationError
from mayaserver.synth.descriptors import (
    ContainerDescriptor,
    PortDescriptor,
    ServiceDescriptor,
    ServicePortDescriptor,
    VolumeDescriptor,
    VolumeMountDescriptor,
    WorkloadDescriptor,
)


# ---------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------
def controller_name(vsm: str) -> str:
    return vsm + lbl.CONTROLLER_SUFFIX


def controller_container_name(vsm: str) -> str:
    return controller_name(vsm) + lbl.CONTAINER_SUFFIX


def service_name(vsm: str) -> str:
    return controller_name(vsm) + lbl.SERVICE_SUFFIX


def replica_name(vsm: str, position: int) -> str:
    return f"{vsm}{lbl.REPLICA_SUFFIX}{position}"


def replica_container_name(vsm: str, position: int) -> str:
    return f"{vsm}{lbl.REPLICA_SUFFIX}{lbl.CONTAINER_SUFFIX}{position}"


def iqn(vsm: str) -> str:
    return f"{lbl.JIVA_IQN_PREFIX}:{vsm}"


# ---------------------------------------------------------------------
# Launch arguments
# ---------------------------------------------------------------------
def controller_args(vsm: str) -> List[str]:
    return [vsm if a == lbl.VOL_NAME_PLACEHOLDER else a for a in lbl.JIVA_CTRL_ARGS]


def replica_args(ctrl_ip: str, storage_size: str | None) -> List[str]:
    size = storage_size or lbl.DEFAULT_STORAGE_SIZE
    subs = {
        lbl.CTRL_IP_PLACEHOLDER: ctrl_ip,
        lbl.STOR_SIZE_PLACEHOLDER: size,
    }
    return [subs.get(a, a) for a in lbl.JIVA_REPLICA_ARGS]


# ---------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------
def controller_workload(profile: VsmProfile) -> WorkloadDescriptor:
    vsm = profile.vsm
    if not profile.controller_image:
        raise ValidationError(f"VSM '{vsm}' requires a controller container image")

    name = controller_name(vsm)
    return WorkloadDescriptor(
        name=name,
        labels={lbl.VSM_SELECTOR_KEY: vsm},
        pod_labels={lbl.VSM_SELECTOR_KEY: name},
        replicas=profile.controller_count,
        container=ContainerDescriptor(
            name=controller_container_name(vsm),
            image=profile.controller_image,
            command=list(lbl.JIVA_CTRL_CMD),
            args=controller_args(vsm),
            ports=[
                PortDescriptor(container_port=lbl.JIVA_ISCSI_PORT, name=lbl.PORT_NAME_ISCSI),
                PortDescriptor(container_port=lbl.JIVA_API_PORT, name=lbl.PORT_NAME_API),
            ],
        ),
    )


def controller_service(profile: VsmProfile) -> ServiceDescriptor:
    vsm = profile.vsm
    return ServiceDescriptor(
        name=service_name(vsm),
        labels={lbl.VSM_SELECTOR_KEY: vsm},
        selector={lbl.VSM_SELECTOR_KEY: controller_name(vsm)},
        ports=[
            ServicePortDescriptor(name=lbl.PORT_NAME_ISCSI, port=lbl.JIVA_ISCSI_PORT),
            ServicePortDescriptor(name=lbl.PORT_NAME_API, port=lbl.JIVA_API_PORT),
        ],
    )


def replica_workload(profile: VsmProfile, ctrl_ip: str, position: int) -> WorkloadDescriptor:
    """
    Replica at the given 1-based position, pointed at the controller IP.
    """
    vsm = profile.vsm
    if not ctrl_ip:
        raise ValidationError(f"VSM '{vsm}' requires a controller IP to build replicas")
    if not profile.replica_image:
        raise ValidationError(f"VSM '{vsm}' requires a replica container image")

    name = replica_name(vsm, position)
    return WorkloadDescriptor(
        name=name,
        labels={lbl.VSM_SELECTOR_KEY: vsm},
        pod_labels={lbl.VSM_SELECTOR_KEY: name},
        replicas=1,
        container=ContainerDescriptor(
            name=replica_container_name(vsm, position),
            image=profile.replica_image,
            command=list(lbl.JIVA_REPLICA_CMD),
            args=replica_args(ctrl_ip, profile.storage_size),
            ports=[PortDescriptor(container_port=p) for p in lbl.JIVA_REPLICA_PORTS],
            volume_mounts=[
                VolumeMountDescriptor(name=lbl.JIVA_MOUNT_NAME, mount_path=lbl.JIVA_MOUNT_PATH),
            ],
        ),
        volume=VolumeDescriptor(
            name=lbl.JIVA_MOUNT_NAME,
            host_path=profile.persistent_path(position),
        ),
    )
