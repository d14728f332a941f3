# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/orchprovider/k8s/client.py
from __future__ import annotations

import logging
from typing import List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from mayaserver.api import labels as lbl
from mayaserver.api.models import VsmProfile
from mayaserver.errors import ClusterConfigError
from mayaserver.orchprovider.k8s.manifests import (
    deployment_from,
    service_from,
    service_record,
    workload_record,
)
from mayaserver.synth.descriptors import (
    ServiceDescriptor,
    ServiceRecord,
    WorkloadDescriptor,
    WorkloadRecord,
)

log = logging.getLogger("mayaserver")

DEFAULT_REQUEST_TIMEOUT = 30


class KubeClient:
    """
    Thin facade over AppsV1Api/CoreV1Api bound to a single namespace.

    Connection is resolved lazily on first use:
      - in_cluster=True  -> service account mounted into the pod
      - in_cluster=False -> kubeconfig (optional path and context)

    Every call carries request_timeout; failures are not retried.
    """

    def __init__(
        self,
        namespace: str = lbl.DEFAULT_NAMESPACE,
        *,
        in_cluster: bool = True,
        kube_context: Optional[str] = None,
        kubeconfig: Optional[str] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.namespace = namespace or lbl.DEFAULT_NAMESPACE
        self.in_cluster = in_cluster
        self.kube_context = kube_context
        self.kubeconfig = kubeconfig
        self.request_timeout = request_timeout
        self._api_client: Optional[client.ApiClient] = None

    @classmethod
    def for_profile(
        cls,
        profile: VsmProfile,
        *,
        kube_context: Optional[str] = None,
        kubeconfig: Optional[str] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> "KubeClient":
        return cls(
            profile.namespace,
            in_cluster=profile.in_cluster,
            kube_context=kube_context,
            kubeconfig=kubeconfig,
            request_timeout=request_timeout,
        )

    # ------------------------------------------------------------------
    # connection
    # ------------------------------------------------------------------
    def _load(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client

        try:
            if self.in_cluster:
                config.load_incluster_config()
                self._api_client = client.ApiClient()
            else:
                self._api_client = config.new_client_from_config(
                    config_file=self.kubeconfig,
                    context=self.kube_context,
                )
        except ConfigException as e:
            mode = "in-cluster" if self.in_cluster else "out-of-cluster"
            raise ClusterConfigError(
                f"Unable to configure {mode} kubernetes client for ns '{self.namespace}': {e}"
            ) from e

        log.debug(
            "Kubernetes client ready (ns=%s, in_cluster=%s, context=%s)",
            self.namespace, self.in_cluster, self.kube_context,
        )
        return self._api_client

    def _apps(self) -> client.AppsV1Api:
        return client.AppsV1Api(self._load())

    def _core(self) -> client.CoreV1Api:
        return client.CoreV1Api(self._load())

    # ------------------------------------------------------------------
    # workloads
    # ------------------------------------------------------------------
    def create_workload(self, desc: WorkloadDescriptor) -> WorkloadRecord:
        log.debug("Creating deployment %s/%s", self.namespace, desc.name)
        created = self._apps().create_namespaced_deployment(
            namespace=self.namespace,
            body=deployment_from(desc),
            _request_timeout=self.request_timeout,
        )
        return workload_record(created)

    def list_workloads(self, selector: str) -> List[WorkloadRecord]:
        resp = self._apps().list_namespaced_deployment(
            namespace=self.namespace,
            label_selector=selector,
            _request_timeout=self.request_timeout,
        )
        return [workload_record(d) for d in resp.items]

    def delete_workload(self, name: str) -> bool:
        """Returns False if the deployment was already gone."""
        try:
            self._apps().delete_namespaced_deployment(
                name=name,
                namespace=self.namespace,
                body=client.V1DeleteOptions(propagation_policy="Foreground"),
                _request_timeout=self.request_timeout,
            )
        except ApiException as e:
            if e.status == 404:
                return False
            raise
        return True

    # ------------------------------------------------------------------
    # services
    # ------------------------------------------------------------------
    def create_service(self, desc: ServiceDescriptor) -> ServiceRecord:
        log.debug("Creating service %s/%s", self.namespace, desc.name)
        created = self._core().create_namespaced_service(
            namespace=self.namespace,
            body=service_from(desc),
            _request_timeout=self.request_timeout,
        )
        return service_record(created)

    def get_service(self, name: str) -> Optional[ServiceRecord]:
        try:
            svc = self._core().read_namespaced_service(
                name=name,
                namespace=self.namespace,
                _request_timeout=self.request_timeout,
            )
        except ApiException as e:
            if e.status == 404:
                return None
            raise
        return service_record(svc)

    def delete_service(self, name: str) -> bool:
        try:
            self._core().delete_namespaced_service(
                name=name,
                namespace=self.namespace,
                _request_timeout=self.request_timeout,
            )
        except ApiException as e:
            if e.status == 404:
                return False
            raise
        return True
