# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/profile/resolver.py

from __future__ import annotations

import logging
from typing import Mapping, Optional

from mayaserver.api import labels as lbl
from mayaserver.api.models import Claim, VsmProfile
from mayaserver.errors import ProfileError
from mayaserver.utils.helpers import check_truthy, cidr_subnet, is_cidr

log = logging.getLogger("mayaserver")


class ProfileResolver:
    """
    Turns a claim's label map into a VsmProfile.

    Every field resolves as: explicit label value -> compiled-in default.
    The VSM name has no default; its absence is always an error.
    Storage size is left unset when absent so the resource builders
    can substitute their own default.
    """

    label = lbl.PVP_PROFILE_NAME_LBL

    def resolve(self, claim: Claim) -> VsmProfile:
        if claim is None:
            raise ProfileError(f"Nil claim in '{self.label}:{lbl.PVC_PROFILE}'")

        labels = claim.labels or {}
        name = _value(labels, lbl.PVP_PROFILE_NAME_LBL) or lbl.PVC_PROFILE
        where = f"'{self.label}:{name}'"

        vsm = _value(labels, lbl.PVP_VSM_NAME_LBL)
        if not vsm:
            raise ProfileError(f"Missing VSM name in {where}")

        replica_count = self._count(
            labels, lbl.PVP_REPLICA_COUNT_LBL, lbl.DEFAULT_REPLICA_COUNT,
            field="replica count", where=where,
        )
        controller_count = self._count(
            labels, lbl.PVP_CONTROLLER_COUNT_LBL, lbl.DEFAULT_CONTROLLER_COUNT,
            field="controller count", where=where,
        )
        if controller_count < 1:
            raise ProfileError(f"Invalid controller count '{controller_count}' in {where}")

        # Unset path count follows the replica count
        path_count = self._count(
            labels, lbl.PVP_PERSISTENT_PATH_COUNT_LBL, replica_count,
            field="persistent path count", where=where,
        )

        network_addr = _value(labels, lbl.OP_NETWORK_CIDR_LBL) or lbl.DEFAULT_NETWORK_CIDR
        if not is_cidr(network_addr):
            raise ProfileError(f"Network address not in CIDR format in {where}")

        profile = VsmProfile(
            profile_label=self.label,
            profile_name=name,
            vsm=vsm,
            controller_image=_value(labels, lbl.PVP_CONTROLLER_IMAGE_LBL) or lbl.DEFAULT_CONTROLLER_IMAGE,
            controller_count=controller_count,
            req_replica=check_truthy(_value(labels, lbl.PVP_REQ_REPLICA_LBL) or lbl.DEFAULT_REQ_REPLICA),
            replica_image=_value(labels, lbl.PVP_REPLICA_IMAGE_LBL) or lbl.DEFAULT_REPLICA_IMAGE,
            replica_count=replica_count,
            storage_size=_value(labels, lbl.PVP_STORAGE_SIZE_LBL) or None,
            persistent_path_base=_value(labels, lbl.PVP_PERSISTENT_PATH_LBL) or lbl.DEFAULT_PERSISTENT_PATH,
            persistent_path_count=path_count,
            req_networking=check_truthy(_value(labels, lbl.PVP_REQ_NETWORKING_LBL) or lbl.DEFAULT_REQ_NETWORKING),
            network_addr=network_addr,
            network_subnet=cidr_subnet(network_addr),
            orchestrator=_value(labels, lbl.OP_NAME_LBL) or lbl.K8S_ORCHESTRATOR,
            namespace=_value(labels, lbl.OP_NS_LBL) or lbl.DEFAULT_NAMESPACE,
            in_cluster=check_truthy(_value(labels, lbl.OP_IN_CLUSTER_LBL) or lbl.DEFAULT_IN_CLUSTER),
        )

        log.debug(
            "Resolved profile %s for VSM '%s' (replicas=%d, orchestrator=%s, ns=%s)",
            profile.identity, vsm, profile.replica_count, profile.orchestrator, profile.namespace,
        )
        return profile

    @staticmethod
    def _count(
        labels: Mapping[str, str],
        key: str,
        default: int,
        *,
        field: str,
        where: str,
    ) -> int:
        raw = _value(labels, key)
        if not raw:
            return default

        try:
            count = int(raw)
        except ValueError:
            raise ProfileError(f"Invalid {field} '{raw}' in {where}") from None

        if count < 0:
            raise ProfileError(f"Invalid {field} '{raw}' in {where}")
        return count


def _value(labels: Mapping[str, str], key: str) -> Optional[str]:
    v = labels.get(key)
    if v is None:
        return None
    return v.strip()


def resolve_profile(claim: Claim) -> VsmProfile:
    return ProfileResolver().resolve(claim)
