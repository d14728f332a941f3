# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/mayaserver/utils/helpers.py

from __future__ import annotations

import ipaddress


def check_truthy(value: str | None) -> bool:
    """Only the case-insensitive token "true" is truthy."""
    if value is None:
        return False
    return value.strip().lower() == "true"


def is_cidr(addr: str) -> bool:
    if "/" not in addr:
        return False
    try:
        ipaddress.ip_interface(addr)
    except ValueError:
        return False
    return True


def cidr_subnet(addr: str) -> str:
    """
    Prefix length of a CIDR address as a decimal string,
    e.g. "172.28.128.0/24" -> "24".
    """
    return str(ipaddress.ip_interface(addr).network.prefixlen)


def append_csv(annotations: dict[str, str], key: str, value: str) -> None:
    """
    Add value to a comma separated annotation, keeping earlier values.
    """
    current = (value or "").strip()
    if not current:
        return

    existing = annotations.get(key, "").strip()
    annotations[key] = f"{existing},{current}" if existing else current
