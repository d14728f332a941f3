# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/errors.py
class MayaError(RuntimeError):
    """Base class for volume provisioning failures."""


class ValidationError(MayaError):
    """Raised for invalid requests, before any orchestrator call."""


class ProfileError(ValidationError):
    """Raised when a claim cannot be resolved into a profile."""


class ReplicaCountMismatchError(ValidationError):
    """Raised when replica count and persistent path count differ."""


class RegistryError(MayaError):
    """Base class for registry failures."""


class DuplicateRegistrationError(RegistryError):
    """Raised when two plugins register under the same name."""


class NotRegisteredError(RegistryError):
    """Raised when a name has no registered factory."""


class NotFoundError(MayaError):
    """Base class for objects missing at the orchestrator."""


class VsmNotFoundError(NotFoundError):
    """Raised when no workloads exist for a VSM."""


class ServiceNotFoundError(NotFoundError):
    """Raised when the controller service of a VSM is missing."""


class UnsupportedOperationError(MayaError):
    """Raised when a plugin does not support the requested operation."""


class ClusterConfigError(MayaError):
    """Raised when the orchestrator connection cannot be configured."""
