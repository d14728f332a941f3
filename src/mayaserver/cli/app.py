# src/mayaserver/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml

from mayaserver.api import labels as lbl
from mayaserver.api.models import Claim
from mayaserver.config.loader import load_claim, load_config
from mayaserver.errors import MayaError
from mayaserver.logging.log import init_logging
from mayaserver.observers.dispatcher import EventBus
from mayaserver.observers.jsonfile import JsonFileObserver
from mayaserver.observers.logger import LoggerObserver
from mayaserver.plugins import build_registries


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="mayaserver volume provisioning CLI")
vsm_app = typer.Typer(help="Add, read, delete and list VSMs")
app.add_typer(vsm_app, name="vsm")


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

def _provisioner(config: Optional[Path], debug: bool):
    cfg = load_config(config)
    logger, run_id, _ = init_logging(base_dir=cfg.log_dir, verbose=debug or cfg.verbose)

    bus = EventBus(observers=[
        LoggerObserver(logger),
        JsonFileObserver(Path(cfg.log_dir) / f"{run_id}.jsonl"),
    ])

    _, provisioners = build_registries(cfg, bus=bus)
    return provisioners.get(cfg.provisioner)


def _claim_for(name: str, namespace: Optional[str], orchestrator: Optional[str], in_cluster: Optional[bool]) -> Claim:
    labels = {lbl.PVP_VSM_NAME_LBL: name}
    if namespace:
        labels[lbl.OP_NS_LBL] = namespace
    if orchestrator:
        labels[lbl.OP_NAME_LBL] = orchestrator
    if in_cluster is not None:
        labels[lbl.OP_IN_CLUSTER_LBL] = "true" if in_cluster else "false"
    return Claim(name=name, labels=labels)


def _echo_yaml(data) -> None:
    typer.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=True).rstrip())


def _fail(e: Exception) -> None:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


# ------------------------------------------------------------------------------
# Options
# ------------------------------------------------------------------------------

ConfigOpt = typer.Option(None, "--config", help="mayaserver config YAML")
NamespaceOpt = typer.Option(None, "--ns", help="Namespace of the VSM")
OrchestratorOpt = typer.Option(None, "--orchestrator")
InClusterOpt = typer.Option(None, "--in-cluster/--out-of-cluster")
DebugOpt = typer.Option(False, "--debug")


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@vsm_app.command("add")
def add(
    claim: Path = typer.Option(..., "--claim", exists=True, dir_okay=False, help="Claim YAML"),
    config: Optional[Path] = ConfigOpt,
    debug: bool = DebugOpt,
):
    """Provision a VSM from a claim file."""
    try:
        annotations = _provisioner(config, debug).add(load_claim(claim))
    except MayaError as e:
        _fail(e)
    _echo_yaml(annotations)


@vsm_app.command("read")
def read(
    name: str,
    namespace: Optional[str] = NamespaceOpt,
    orchestrator: Optional[str] = OrchestratorOpt,
    in_cluster: Optional[bool] = InClusterOpt,
    config: Optional[Path] = ConfigOpt,
    debug: bool = DebugOpt,
):
    """Show the observed state of a VSM."""
    try:
        annotations = _provisioner(config, debug).read(
            _claim_for(name, namespace, orchestrator, in_cluster)
        )
    except MayaError as e:
        _fail(e)
    _echo_yaml(annotations)


@vsm_app.command("delete")
def delete(
    name: str,
    namespace: Optional[str] = NamespaceOpt,
    orchestrator: Optional[str] = OrchestratorOpt,
    in_cluster: Optional[bool] = InClusterOpt,
    config: Optional[Path] = ConfigOpt,
    debug: bool = DebugOpt,
):
    """Remove the replicas, service and controller of a VSM."""
    try:
        deleted = _provisioner(config, debug).delete(
            _claim_for(name, namespace, orchestrator, in_cluster)
        )
    except MayaError as e:
        _fail(e)
    _echo_yaml({"deleted": deleted})


@vsm_app.command("list")
def list_vsms(
    namespace: str = typer.Option(lbl.DEFAULT_NAMESPACE, "--ns"),
    orchestrator: str = typer.Option(lbl.K8S_ORCHESTRATOR, "--orchestrator"),
    in_cluster: bool = typer.Option(True, "--in-cluster/--out-of-cluster"),
    config: Optional[Path] = ConfigOpt,
    debug: bool = DebugOpt,
):
    """List VSM names in a namespace."""
    try:
        names = _provisioner(config, debug).list(
            namespace, orchestrator=orchestrator, in_cluster=in_cluster,
        )
    except MayaError as e:
        _fail(e)
    _echo_yaml({"vsms": names})


def main() -> None:
    app()


if __name__ == "__main__":
    main()
