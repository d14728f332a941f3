from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pytest

from mayaserver.api import labels as lbl
from mayaserver.api.models import Claim
from mayaserver.observers.dispatcher import EventBus
from mayaserver.observers.interface import Observer
from mayaserver.orchprovider.k8s.orchestrator import K8sOrchestrator
from mayaserver.synth.descriptors import (
    ServiceDescriptor,
    ServiceRecord,
    WorkloadDescriptor,
    WorkloadRecord,
)


class Capture(Observer):
    def __init__(self): self.events = []
    def notify(self, event): self.events.append(event)

    def kinds(self) -> List[str]:
        return [e.__class__.__name__ for e in self.events]


class FakeCluster:
    """
    In-memory stand-in for a namespaced cluster client.

    fail_on maps a verb ("create_workload", "create_service", ...) to the
    exception it should raise; cluster_ip is handed to every created service.
    """

    def __init__(self, namespace: str = "default", cluster_ip: str = "10.0.0.5"):
        self.namespace = namespace
        self.cluster_ip = cluster_ip
        self.workloads: Dict[str, WorkloadDescriptor] = {}
        self.services: Dict[str, ServiceDescriptor] = {}
        self.available: Dict[str, bool] = {}
        self.fail_on: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    def _maybe_fail(self, verb: str) -> None:
        if verb in self.fail_on:
            raise self.fail_on[verb]

    @staticmethod
    def _matches(selector: str, labels: Dict[str, str]) -> bool:
        for term in selector.split(","):
            if "=" in term:
                k, v = term.split("=", 1)
                if labels.get(k) != v:
                    return False
            elif term not in labels:
                return False
        return True

    def _record(self, d: WorkloadDescriptor) -> WorkloadRecord:
        status = "True" if self.available.get(d.name, True) else "False"
        return WorkloadRecord(
            name=d.name,
            labels=dict(d.labels),
            replicas=d.replicas,
            ready_replicas=d.replicas if status == "True" else 0,
            conditions=(("Available", status),),
            args=list(d.container.args),
        )

    def create_workload(self, desc: WorkloadDescriptor) -> WorkloadRecord:
        self.calls.append(("create_workload", desc.name))
        self._maybe_fail("create_workload")
        if desc.name in self.workloads:
            raise RuntimeError(f"deployment {desc.name} already exists")
        self.workloads[desc.name] = desc
        return self._record(desc)

    def list_workloads(self, selector: str) -> List[WorkloadRecord]:
        self.calls.append(("list_workloads", selector))
        self._maybe_fail("list_workloads")
        return [self._record(d) for d in self.workloads.values() if self._matches(selector, d.labels)]

    def delete_workload(self, name: str) -> bool:
        self.calls.append(("delete_workload", name))
        self._maybe_fail("delete_workload")
        return self.workloads.pop(name, None) is not None

    def create_service(self, desc: ServiceDescriptor) -> ServiceRecord:
        self.calls.append(("create_service", desc.name))
        self._maybe_fail("create_service")
        self.services[desc.name] = desc
        return ServiceRecord(name=desc.name, cluster_ip=self.cluster_ip, labels=dict(desc.labels))

    def get_service(self, name: str) -> Optional[ServiceRecord]:
        self.calls.append(("get_service", name))
        self._maybe_fail("get_service")
        desc = self.services.get(name)
        if desc is None:
            return None
        return ServiceRecord(name=name, cluster_ip=self.cluster_ip, labels=dict(desc.labels))

    def delete_service(self, name: str) -> bool:
        self.calls.append(("delete_service", name))
        self._maybe_fail("delete_service")
        return self.services.pop(name, None) is not None


@pytest.fixture(autouse=True)
def _restore_package_logger():
    # init_logging replaces handlers and stops propagation; undo after each test
    logger = logging.getLogger("mayaserver")
    handlers, propagate, level = list(logger.handlers), logger.propagate, logger.level
    yield
    for h in list(logger.handlers):
        if h not in handlers:
            logger.removeHandler(h)
            h.close()
    logger.propagate = propagate
    logger.setLevel(level)


@pytest.fixture
def cluster() -> FakeCluster:
    return FakeCluster()


@pytest.fixture
def capture() -> Capture:
    return Capture()


@pytest.fixture
def orchestrator(cluster, capture) -> K8sOrchestrator:
    def factory(namespace, in_cluster):
        cluster.namespace = namespace
        return cluster

    return K8sOrchestrator(
        lbl.OP_NAME_LBL,
        lbl.K8S_ORCHESTRATOR,
        client_factory=factory,
        bus=EventBus(observers=[capture]),
    )


def make_claim(vsm: Optional[str] = "demo", labels: Optional[Dict[str, str]] = None) -> Claim:
    merged = {}
    if vsm is not None:
        merged[lbl.PVP_VSM_NAME_LBL] = vsm
    merged.update(labels or {})
    return Claim(name=vsm or "", labels=merged)


@pytest.fixture
def claim_factory():
    return make_claim
