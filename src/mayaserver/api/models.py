# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/api/models.py

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from mayaserver.api import labels as lbl
from mayaserver.errors import ProfileError


class Claim(BaseModel):
    """
    A provisioning request for one VSM.
    Labels are the only configuration carrier; unknown keys are ignored.
    """
    model_config = ConfigDict(frozen=True)

    name: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)


class VsmProfile(BaseModel):
    """
    Resolved, typed configuration of a single VSM request.
    Built by ProfileResolver; never constructed from raw labels elsewhere.
    """
    model_config = ConfigDict(frozen=True)

    # profile identity
    profile_label: str = lbl.PVP_PROFILE_NAME_LBL
    profile_name: str = lbl.PVC_PROFILE

    vsm: str

    # controller
    controller_image: str = lbl.DEFAULT_CONTROLLER_IMAGE
    controller_count: int = lbl.DEFAULT_CONTROLLER_COUNT

    # replicas
    req_replica: bool = True
    replica_image: str = lbl.DEFAULT_REPLICA_IMAGE
    replica_count: int = lbl.DEFAULT_REPLICA_COUNT
    storage_size: Optional[str] = None
    persistent_path_base: str = lbl.DEFAULT_PERSISTENT_PATH
    persistent_path_count: int = lbl.DEFAULT_REPLICA_COUNT

    # networking
    req_networking: bool = True
    network_addr: str = lbl.DEFAULT_NETWORK_CIDR
    network_subnet: str = "24"

    # orchestration
    orchestrator: str = lbl.K8S_ORCHESTRATOR
    namespace: str = lbl.DEFAULT_NAMESPACE
    in_cluster: bool = True

    @property
    def identity(self) -> str:
        return f"{self.profile_label}:{self.profile_name}"

    @property
    def network_cidr(self) -> str:
        return self.network_addr

    def persistent_path(self, position: int) -> str:
        """
        Host path backing the replica at the given 1-based position.
        """
        if position < 1 or position > self.persistent_path_count:
            raise ProfileError(
                f"Invalid persistent path position '{position}' for VSM '{self.vsm}' "
                f"with '{self.persistent_path_count}' persistent paths in '{self.identity}'"
            )
        base = self.persistent_path_base.rstrip("/")
        return f"{base}/{self.vsm}/rep{position}"
