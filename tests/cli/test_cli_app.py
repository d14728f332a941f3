from pathlib import Path
import textwrap

import pytest
import yaml
from typer.testing import CliRunner

from mayaserver.api import labels as lbl
from mayaserver.cli import app as cli_app
from mayaserver.plugins import build_registries

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    f = tmp_path / "mayaserver.yaml"
    f.write_text(f"environment: test\nlog_dir: {tmp_path / 'logs'}\n")
    return f


@pytest.fixture(autouse=True)
def fake_cluster(monkeypatch, cluster):
    def fake_build(cfg=None, *, bus=None, client_factory=None):
        return build_registries(cfg, bus=bus, client_factory=lambda namespace, in_cluster: cluster)

    monkeypatch.setattr(cli_app, "build_registries", fake_build)
    return cluster


def claim_file(tmp_path: Path, **labels) -> Path:
    f = tmp_path / "claim.yaml"
    body = {"name": "demo", "labels": {lbl.PVP_VSM_NAME_LBL: "demo", **labels}}
    f.write_text(yaml.safe_dump(body))
    return f


def test_add_prints_annotations(tmp_path, config_file, fake_cluster):
    result = runner.invoke(cli_app.app, ["vsm", "add", "--claim", str(claim_file(tmp_path)), "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    out = yaml.safe_load(_yaml_part(result.stdout))
    assert out[lbl.REPLICA_COUNT_API_LBL] == "2"
    assert out[lbl.TARGET_PORTALS_API_LBL] == "10.0.0.5:3260"
    assert sorted(fake_cluster.workloads) == ["demo-ctrl", "demo-rep1", "demo-rep2"]
    assert list((tmp_path / "logs").glob("*.jsonl"))


def test_read_list_delete(tmp_path, config_file, fake_cluster):
    runner.invoke(cli_app.app, ["vsm", "add", "--claim", str(claim_file(tmp_path)), "--config", str(config_file)])

    read = runner.invoke(cli_app.app, ["vsm", "read", "demo", "--config", str(config_file)])
    assert read.exit_code == 0, read.output
    assert yaml.safe_load(_yaml_part(read.stdout))[lbl.IQN_API_LBL] == "iqn.2016-09.com.openebs.jiva:demo"

    listed = runner.invoke(cli_app.app, ["vsm", "list", "--config", str(config_file)])
    assert yaml.safe_load(_yaml_part(listed.stdout)) == {"vsms": ["demo"]}

    deleted = runner.invoke(cli_app.app, ["vsm", "delete", "demo", "--config", str(config_file)])
    assert deleted.exit_code == 0, deleted.output
    assert fake_cluster.workloads == {}


def test_errors_exit_non_zero(tmp_path, config_file):
    result = runner.invoke(cli_app.app, ["vsm", "read", "ghost", "--ns", "storage", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "VSM 'ghost' not found" in result.output


def test_mismatch_reported(tmp_path, config_file, fake_cluster):
    f = claim_file(tmp_path, **{lbl.PVP_PERSISTENT_PATH_COUNT_LBL: "1"})
    result = runner.invoke(cli_app.app, ["vsm", "add", "--claim", str(f), "--config", str(config_file)])

    assert result.exit_code == 1
    assert "does not match persistent path count '1'" in result.output
    assert list(fake_cluster.workloads) == ["demo-ctrl"]


def _yaml_part(stdout: str) -> str:
    # console log lines share stdout with the YAML document
    return "\n".join(l for l in stdout.splitlines() if " | " not in l)
