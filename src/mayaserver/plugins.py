# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/plugins.py

from __future__ import annotations

from typing import Optional, Tuple

from mayaserver.api import labels as lbl
from mayaserver.config.models import MayaConfig
from mayaserver.observers.dispatcher import EventBus
from mayaserver.orchprovider.k8s.orchestrator import ClientFactory, K8sOrchestrator
from mayaserver.registry import Registry, new_orchestrator_registry, new_provisioner_registry
from mayaserver.volumeprovisioner.jiva import JivaProvisioner


def build_registries(
    cfg: Optional[MayaConfig] = None,
    *,
    bus: Optional[EventBus] = None,
    client_factory: Optional[ClientFactory] = None,
) -> Tuple[Registry, Registry]:
    """
    Create the orchestrator and provisioner registries with the
    built-in plugins registered. Call once per process.

    Returns (orchestrators, provisioners).
    """
    cfg = cfg or MayaConfig()
    orchestrators = new_orchestrator_registry()
    provisioners = new_provisioner_registry()

    def k8s_factory(label: str, name: str) -> K8sOrchestrator:
        return K8sOrchestrator(
            label,
            name,
            client_factory=client_factory,
            bus=bus,
            env=cfg.environment,
            kube_context=cfg.kube_context,
            kubeconfig=cfg.kubeconfig,
            request_timeout=cfg.request_timeout,
        )

    def jiva_factory(label: str, name: str) -> JivaProvisioner:
        return JivaProvisioner(label, name, orchestrators=orchestrators)

    orchestrators.register(lbl.K8S_ORCHESTRATOR, k8s_factory)
    provisioners.register(lbl.JIVA_PROVISIONER, jiva_factory)
    return orchestrators, provisioners
