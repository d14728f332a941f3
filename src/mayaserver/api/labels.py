# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/api/labels.py
"""
Claim label keys, compiled-in defaults and the annotation keys returned
when a VSM is read back from the orchestrator.
"""

# ---------------------------------------------------------------------
# Claim labels: volume provisioner
# ---------------------------------------------------------------------
PVP_PREFIX = "volumeprovisioner.mapiserver.openebs.io/"

PVP_VSM_NAME_LBL = PVP_PREFIX + "vsm-name"
PVP_NAME_LBL = PVP_PREFIX + "name"
PVP_PROFILE_NAME_LBL = PVP_PREFIX + "profile-name"
PVP_CONTROLLER_IMAGE_LBL = PVP_PREFIX + "controller-image"
PVP_CONTROLLER_COUNT_LBL = PVP_PREFIX + "controller-count"
PVP_REPLICA_IMAGE_LBL = PVP_PREFIX + "replica-image"
PVP_REPLICA_COUNT_LBL = PVP_PREFIX + "replica-count"
PVP_STORAGE_SIZE_LBL = PVP_PREFIX + "storage-size"
PVP_REQ_REPLICA_LBL = PVP_PREFIX + "req-replica"
PVP_REQ_NETWORKING_LBL = PVP_PREFIX + "req-networking"
PVP_PERSISTENT_PATH_LBL = PVP_PREFIX + "persistent-path"
PVP_PERSISTENT_PATH_COUNT_LBL = PVP_PREFIX + "persistent-path-count"

# ---------------------------------------------------------------------
# Claim labels: orchestration provider
# ---------------------------------------------------------------------
OP_PREFIX = "orchprovider.mapiserver.openebs.io/"

OP_NAME_LBL = OP_PREFIX + "name"
OP_NETWORK_CIDR_LBL = OP_PREFIX + "network-cidr"
OP_NS_LBL = OP_PREFIX + "ns"
OP_IN_CLUSTER_LBL = OP_PREFIX + "in-cluster"

# ---------------------------------------------------------------------
# Registry names
# ---------------------------------------------------------------------
K8S_ORCHESTRATOR = "kubernetes"
JIVA_PROVISIONER = "jiva"
PVC_PROFILE = "pvc"

# ---------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------
DEFAULT_CONTROLLER_IMAGE = "openebs/jiva:latest"
DEFAULT_REPLICA_IMAGE = "openebs/jiva:latest"
DEFAULT_CONTROLLER_COUNT = 1
DEFAULT_REPLICA_COUNT = 2
DEFAULT_STORAGE_SIZE = "1G"
DEFAULT_PERSISTENT_PATH = "/var/openebs"
DEFAULT_NETWORK_CIDR = "172.28.128.0/24"
DEFAULT_NAMESPACE = "default"
DEFAULT_IN_CLUSTER = "true"
DEFAULT_REQ_REPLICA = "true"
DEFAULT_REQ_NETWORKING = "true"

# ---------------------------------------------------------------------
# Naming & selection
# ---------------------------------------------------------------------
VSM_SELECTOR_KEY = "vsm"
CONTROLLER_SUFFIX = "-ctrl"
REPLICA_SUFFIX = "-rep"
CONTAINER_SUFFIX = "-con"
SERVICE_SUFFIX = "-svc"

# ---------------------------------------------------------------------
# Jiva wire conventions
# ---------------------------------------------------------------------
JIVA_ISCSI_PORT = 3260
JIVA_API_PORT = 9501
JIVA_REPLICA_PORTS = (9502, 9503, 9504)
PORT_NAME_ISCSI = "iscsi"
PORT_NAME_API = "api"

JIVA_IQN_PREFIX = "iqn.2016-09.com.openebs.jiva"
JIVA_MOUNT_NAME = "openebs"
JIVA_MOUNT_PATH = "/openebs"

CTRL_IP_PLACEHOLDER = "__CTRL_IP__"
STOR_SIZE_PLACEHOLDER = "__STOR_SIZE__"
VOL_NAME_PLACEHOLDER = "__VOL_NAME__"

JIVA_CTRL_CMD = ("launch",)
JIVA_CTRL_ARGS = ("controller", "--frontend", "gotgt", VOL_NAME_PLACEHOLDER)
JIVA_REPLICA_CMD = ("launch",)
# the storage size is always the second-to-last argument
JIVA_REPLICA_ARGS = (
    "replica",
    "--frontendIP",
    CTRL_IP_PLACEHOLDER,
    "--size",
    STOR_SIZE_PLACEHOLDER,
    JIVA_MOUNT_PATH,
)

# ---------------------------------------------------------------------
# Annotations produced by a read
# ---------------------------------------------------------------------
API_PREFIX = "vsm.openebs.io/"

CLUSTER_IPS_API_LBL = API_PREFIX + "cluster-ips"
TARGET_PORTALS_API_LBL = API_PREFIX + "targetportals"
IQN_API_LBL = API_PREFIX + "iqn"
REPLICA_COUNT_API_LBL = API_PREFIX + "replica-count"
VOLUME_SIZE_API_LBL = API_PREFIX + "volume-size"
CONTROLLER_STATUS_API_LBL = API_PREFIX + "controller-status"
REPLICA_STATUS_API_LBL = API_PREFIX + "replica-status"
