# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/config/loader.py

import logging
import os
import yaml
from pathlib import Path
from .models import MayaConfig
from mayaserver.api.models import Claim
from mayaserver.errors import ValidationError

log = logging.getLogger("mayaserver")


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def load_config(path: str | Path | None = None) -> MayaConfig:
    """
    Load and validate the mayaserver process config.

    Lookup order when no path is given:
      1. ``MAYASERVER_CONFIG`` env var
      2. ``~/.mayaserver/config.yaml``

    A missing file is not an error; defaults apply.
    ``${ENV_VAR}`` placeholders are resolved at load time.
    """
    if path is None:
        path = os.environ.get("MAYASERVER_CONFIG") or Path.home() / ".mayaserver" / "config.yaml"
    path = Path(path)

    if not path.is_file():
        log.debug("No config at %s; using defaults", path)
        return MayaConfig()

    log.debug("Loading config from %s", path)
    return MayaConfig.model_validate(_load_yaml(path))


def load_claim(path: str | Path) -> Claim:
    """
    Read a claim from YAML. Either a full claim
    (``name`` + ``labels``) or a bare label map is accepted.
    """
    path = Path(path)
    data = _load_yaml(path)
    if not isinstance(data, dict):
        raise ValidationError(f"Claim file {path} must hold a mapping")

    if "labels" not in data:
        data = {"labels": data}

    labels = data.get("labels") or {}
    # YAML turns true/2 into bool/int; labels are strings on the wire
    data["labels"] = {str(k): _label_str(v) for k, v in labels.items()}
    return Claim.model_validate(data)


def _label_str(v) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    return "" if v is None else str(v)
