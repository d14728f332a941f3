# src/mayaserver/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events of a single storage operation
    env: str          # dev/staging/prod
    context: Optional[str]  # kube-context

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(env: str, context: Optional[str]) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": str(uuid.uuid4()),
        "env": env,
        "context": context,
    }


# ---------------------------------------------------------------------
# Add lifecycle
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class VsmAddStarted(BaseEvent):
    vsm: str
    namespace: str
    replicas: int

@dataclass(frozen=True)
class WorkloadCreated(BaseEvent):
    vsm: str
    name: str
    role: str   # controller / replica

@dataclass(frozen=True)
class ServiceCreated(BaseEvent):
    vsm: str
    name: str
    cluster_ip: str

@dataclass(frozen=True)
class VsmAddFailed(BaseEvent):
    vsm: str
    error: str

@dataclass(frozen=True)
class VsmAddSucceeded(BaseEvent):
    vsm: str
    duration_ms: int


# ---------------------------------------------------------------------
# Read / delete
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class VsmRead(BaseEvent):
    vsm: str
    namespace: str

@dataclass(frozen=True)
class VsmDeleted(BaseEvent):
    vsm: str
    deleted: List[str]
