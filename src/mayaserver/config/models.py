# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/config/models.py

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mayaserver.api import labels as lbl


class MayaConfig(BaseModel):
    """
    Process level settings. Per-volume settings travel on the claim labels.
    """
    model_config = ConfigDict(extra="forbid")

    environment: str = "dev"

    # out-of-cluster connection; ignored for in-cluster claims
    kube_context: Optional[str] = None
    kubeconfig: Optional[str] = None

    request_timeout: float = Field(default=30, gt=0)
    provisioner: str = lbl.JIVA_PROVISIONER

    log_dir: Path = Field(default_factory=lambda: Path.home() / ".mayaserver" / "logs")
    verbose: bool = False
