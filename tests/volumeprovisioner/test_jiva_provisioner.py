import pytest

from mayaserver.api import labels as lbl
from mayaserver.errors import NotRegisteredError, UnsupportedOperationError, ValidationError
from mayaserver.plugins import build_registries
from mayaserver.registry import new_orchestrator_registry
from mayaserver.volumeprovisioner.jiva import JivaProvisioner


@pytest.fixture
def provisioner(cluster):
    _, provisioners = build_registries(client_factory=lambda namespace, in_cluster: cluster)
    return provisioners.get("jiva")


def test_add_then_read_then_delete(provisioner, cluster, claim_factory):
    claim = claim_factory("demo")

    added = provisioner.add(claim)
    assert added[lbl.REPLICA_COUNT_API_LBL] == "2"

    assert provisioner.read(claim) == added
    assert provisioner.list("default") == ["demo"]

    provisioner.delete(claim)
    assert cluster.workloads == {}


def test_unknown_orchestrator(provisioner, claim_factory):
    with pytest.raises(NotRegisteredError) as ei:
        provisioner.add(claim_factory("demo", {lbl.OP_NAME_LBL: "nomad"}))
    assert "'nomad' is not registered as orchestrator" in str(ei.value)


def test_orchestrator_without_storage_ops():
    class NoStorage:
        label, name, region = lbl.OP_NAME_LBL, "bare", ""
        def storage_ops(self): return None, False

    orchestrators = new_orchestrator_registry()
    orchestrators.register("bare", lambda label, name: NoStorage())
    prov = JivaProvisioner(lbl.PVP_NAME_LBL, "jiva", orchestrators=orchestrators)

    with pytest.raises(UnsupportedOperationError) as ei:
        prov.list("default", orchestrator="bare")
    assert str(ei.value) == f"Storage operations not supported by '{lbl.OP_NAME_LBL}:bare'"


def test_requires_label_and_name():
    with pytest.raises(ValidationError):
        JivaProvisioner("", "jiva", orchestrators=new_orchestrator_registry())
