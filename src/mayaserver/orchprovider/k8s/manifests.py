# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/orchprovider/k8s/manifests.py
"""
Mapping between orchestrator-neutral descriptors/records and
kubernetes client objects (apps/v1 Deployment, v1 Service).
"""

from __future__ import annotations

from kubernetes import client

from mayaserver.synth.descriptors import (
    ServiceDescriptor,
    ServiceRecord,
    WorkloadDescriptor,
    WorkloadRecord,
)


def deployment_from(desc: WorkloadDescriptor) -> client.V1Deployment:
    c = desc.container
    container = client.V1Container(
        name=c.name,
        image=c.image,
        command=list(c.command) or None,
        args=list(c.args) or None,
        ports=[
            client.V1ContainerPort(container_port=p.container_port, name=p.name, protocol=p.protocol)
            for p in c.ports
        ] or None,
        volume_mounts=[
            client.V1VolumeMount(name=m.name, mount_path=m.mount_path)
            for m in c.volume_mounts
        ] or None,
    )

    volumes = None
    if desc.volume is not None:
        volumes = [
            client.V1Volume(
                name=desc.volume.name,
                host_path=client.V1HostPathVolumeSource(path=desc.volume.host_path),
            )
        ]

    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(name=desc.name, labels=dict(desc.labels)),
        spec=client.V1DeploymentSpec(
            replicas=desc.replicas,
            selector=client.V1LabelSelector(match_labels=dict(desc.pod_labels)),
            template=client.V1PodTemplateSpec(
                metadata=client.V1ObjectMeta(labels=dict(desc.pod_labels)),
                spec=client.V1PodSpec(containers=[container], volumes=volumes),
            ),
        ),
    )


def service_from(desc: ServiceDescriptor) -> client.V1Service:
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(name=desc.name, labels=dict(desc.labels)),
        spec=client.V1ServiceSpec(
            selector=dict(desc.selector),
            ports=[
                client.V1ServicePort(name=p.name, port=p.port, protocol=p.protocol)
                for p in desc.ports
            ],
        ),
    )


def workload_record(d: client.V1Deployment) -> WorkloadRecord:
    meta = d.metadata
    spec = d.spec
    status = d.status

    args = []
    if spec is not None and spec.template is not None and spec.template.spec is not None:
        containers = spec.template.spec.containers or []
        if containers:
            args = list(containers[0].args or [])

    conditions = ()
    if status is not None and status.conditions:
        conditions = tuple((c.type, c.status) for c in status.conditions)

    return WorkloadRecord(
        name=meta.name,
        labels=dict(meta.labels or {}),
        replicas=(spec.replicas if spec is not None and spec.replicas is not None else 0),
        ready_replicas=(status.ready_replicas or 0) if status is not None else 0,
        conditions=conditions,
        args=args,
    )


def service_record(s: client.V1Service) -> ServiceRecord:
    cluster_ip = ""
    if s.spec is not None and s.spec.cluster_ip and s.spec.cluster_ip != "None":
        cluster_ip = s.spec.cluster_ip
    return ServiceRecord(
        name=s.metadata.name,
        cluster_ip=cluster_ip,
        labels=dict(s.metadata.labels or {}),
    )
