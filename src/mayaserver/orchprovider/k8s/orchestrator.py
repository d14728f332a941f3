# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/orchprovider/k8s/orchestrator.py

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from mayaserver.api import labels as lbl
from mayaserver.api.models import VsmProfile
from mayaserver.errors import (
    ReplicaCountMismatchError,
    ServiceNotFoundError,
    ValidationError,
    VsmNotFoundError,
)
from mayaserver.observers.dispatcher import EventBus
from mayaserver.observers.events import (
    ServiceCreated,
    VsmAddFailed,
    VsmAddStarted,
    VsmAddSucceeded,
    VsmDeleted,
    VsmRead,
    WorkloadCreated,
    new_ctx,
)
from mayaserver.orchprovider.interface import ClusterClient
from mayaserver.orchprovider.k8s import state
from mayaserver.orchprovider.k8s.client import DEFAULT_REQUEST_TIMEOUT, KubeClient
from mayaserver.synth import jiva

log = logging.getLogger("mayaserver")

# client_factory(namespace, in_cluster) -> ClusterClient
ClientFactory = Callable[[str, bool], ClusterClient]


class K8sOrchestrator:
    """
    Kubernetes orchestrator. Provides the storage operations of a VSM:
    one controller deployment, its service and N replica deployments.

    Calls are sequential and blocking. Nothing created is rolled back
    when a later step fails; delete_storage cleans up what exists.
    """

    def __init__(
        self,
        label: str,
        name: str,
        *,
        client_factory: Optional[ClientFactory] = None,
        bus: Optional[EventBus] = None,
        env: str = "dev",
        kube_context: Optional[str] = None,
        kubeconfig: Optional[str] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        if not label:
            raise ValidationError("Label not found while building k8s orchestrator")
        if not name:
            raise ValidationError("Name not found while building k8s orchestrator")

        self._label = label
        self._name = name
        self.bus = bus or EventBus()
        self.env = env
        self.kube_context = kube_context

        if client_factory is None:
            def client_factory(namespace: str, in_cluster: bool) -> ClusterClient:
                return KubeClient(
                    namespace,
                    in_cluster=in_cluster,
                    kube_context=kube_context,
                    kubeconfig=kubeconfig,
                    request_timeout=request_timeout,
                )
        self._client_factory = client_factory

    # ------------------------------------------------------------------
    # identity
    # ------------------------------------------------------------------
    @property
    def label(self) -> str:
        return self._label

    @property
    def name(self) -> str:
        return self._name

    @property
    def region(self) -> str:
        # kubernetes has no notion of region
        return ""

    def storage_ops(self) -> Tuple["K8sOrchestrator", bool]:
        return self, True

    def _where(self, namespace: str) -> str:
        return f"'{self._label}:{self._name}' 'ns:{namespace}'"

    def _client(self, profile: VsmProfile) -> ClusterClient:
        return self._client_factory(profile.namespace, profile.in_cluster)

    # ------------------------------------------------------------------
    # add
    # ------------------------------------------------------------------
    def add_storage(self, profile: VsmProfile) -> Dict[str, str]:
        vsm = profile.vsm
        if not vsm:
            raise ValidationError(f"Missing VSM name in '{profile.identity}'")
        if not profile.controller_image:
            raise ValidationError(f"VSM '{vsm}' requires a controller container image")

        ctx = new_ctx(self.env, self.kube_context)
        self.bus.emit(VsmAddStarted(
            **ctx, vsm=vsm, namespace=profile.namespace,
            replicas=profile.replica_count if profile.req_replica else 0,
        ))
        t0 = time.time()

        try:
            cli = self._client(profile)

            ctrl = cli.create_workload(jiva.controller_workload(profile))
            log.info("Created controller '%s' for VSM '%s'", ctrl.name, vsm)
            self.bus.emit(WorkloadCreated(**ctx, vsm=vsm, name=ctrl.name, role="controller"))

            svc = cli.create_service(jiva.controller_service(profile))
            log.info("Created service '%s' for VSM '%s'", svc.name, vsm)

            ctrl_ip = self._controller_ip(cli, profile)
            self.bus.emit(ServiceCreated(**ctx, vsm=vsm, name=svc.name, cluster_ip=ctrl_ip))

            if profile.req_replica:
                self._add_replicas(cli, profile, ctrl_ip, ctx)

            annotations = self._read(cli, profile)
        except Exception as e:
            self.bus.emit(VsmAddFailed(**ctx, vsm=vsm, error=str(e)))
            raise

        self.bus.emit(VsmAddSucceeded(**ctx, vsm=vsm, duration_ms=int((time.time() - t0) * 1000)))
        return annotations

    def _controller_ip(self, cli: ClusterClient, profile: VsmProfile) -> str:
        svc_name = jiva.service_name(profile.vsm)
        svc = cli.get_service(svc_name)
        if svc is None or not svc.cluster_ip:
            raise ServiceNotFoundError(
                f"Controller IP of service '{svc_name}' for VSM '{profile.vsm}' "
                f"not found at {self._where(cli.namespace)}"
            )
        return svc.cluster_ip

    def _add_replicas(self, cli: ClusterClient, profile: VsmProfile, ctrl_ip: str, ctx: dict) -> None:
        vsm = profile.vsm
        if profile.replica_count != profile.persistent_path_count:
            raise ReplicaCountMismatchError(
                f"VSM '{vsm}' replica count '{profile.replica_count}' does not match "
                f"persistent path count '{profile.persistent_path_count}'"
            )

        for position in range(1, profile.replica_count + 1):
            rep = cli.create_workload(jiva.replica_workload(profile, ctrl_ip, position))
            log.info("Created replica '%s' for VSM '%s'", rep.name, vsm)
            self.bus.emit(WorkloadCreated(**ctx, vsm=vsm, name=rep.name, role="replica"))

    # ------------------------------------------------------------------
    # read
    # ------------------------------------------------------------------
    def read_storage(self, profile: VsmProfile) -> Dict[str, str]:
        annotations = self._read(self._client(profile), profile)
        self.bus.emit(VsmRead(
            **new_ctx(self.env, self.kube_context), vsm=profile.vsm, namespace=profile.namespace,
        ))
        return annotations

    def _read(self, cli: ClusterClient, profile: VsmProfile) -> Dict[str, str]:
        vsm = profile.vsm
        workloads = cli.list_workloads(f"{lbl.VSM_SELECTOR_KEY}={vsm}")
        if not workloads:
            raise VsmNotFoundError(f"VSM '{vsm}' not found at {self._where(cli.namespace)}")

        svc_name = jiva.service_name(vsm)
        svc = cli.get_service(svc_name)
        if svc is None:
            raise ServiceNotFoundError(
                f"Service '{svc_name}' of VSM '{vsm}' not found at {self._where(cli.namespace)}"
            )

        return state.synthesize(vsm, workloads, svc)

    # ------------------------------------------------------------------
    # delete / list
    # ------------------------------------------------------------------
    def delete_storage(self, profile: VsmProfile) -> List[str]:
        """
        Removes replicas, then the service, then the controller.
        Objects already gone are skipped.
        """
        vsm = profile.vsm
        cli = self._client(profile)
        workloads = cli.list_workloads(f"{lbl.VSM_SELECTOR_KEY}={vsm}")

        replicas = sorted(w.name for w in workloads if state.is_replica(vsm, w.name))
        deleted: List[str] = []

        for name in replicas:
            if cli.delete_workload(name):
                deleted.append(name)

        svc_name = jiva.service_name(vsm)
        if cli.delete_service(svc_name):
            deleted.append(svc_name)

        ctrl_name = jiva.controller_name(vsm)
        if cli.delete_workload(ctrl_name):
            deleted.append(ctrl_name)

        if not deleted:
            raise VsmNotFoundError(f"VSM '{vsm}' not found at {self._where(cli.namespace)}")

        log.info("Deleted VSM '%s': %s", vsm, ", ".join(deleted))
        self.bus.emit(VsmDeleted(**new_ctx(self.env, self.kube_context), vsm=vsm, deleted=deleted))
        return deleted

    def list_storage(self, namespace: str, *, in_cluster: bool = True) -> List[str]:
        cli = self._client_factory(namespace or lbl.DEFAULT_NAMESPACE, in_cluster)
        workloads = cli.list_workloads(lbl.VSM_SELECTOR_KEY)
        return sorted({w.labels[lbl.VSM_SELECTOR_KEY] for w in workloads if w.labels.get(lbl.VSM_SELECTOR_KEY)})
