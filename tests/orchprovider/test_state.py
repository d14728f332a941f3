from mayaserver.api import labels as lbl
from mayaserver.orchprovider.k8s import state
from mayaserver.synth.descriptors import ServiceRecord, WorkloadRecord


def ctrl(available=True):
    return WorkloadRecord(
        name="demo-ctrl", labels={"vsm": "demo"}, replicas=1,
        conditions=(("Available", "True" if available else "False"),),
        args=["controller", "--frontend", "gotgt", "demo"],
    )


def rep(pos, size="1G", available=True):
    return WorkloadRecord(
        name=f"demo-rep{pos}", labels={"vsm": "demo"}, replicas=1,
        conditions=(("Available", "True" if available else "False"),),
        args=["replica", "--frontendIP", "10.0.0.5", "--size", size, "/openebs"],
    )


def test_name_classification():
    assert state.is_controller("demo", "demo-ctrl")
    assert not state.is_controller("demo", "demo-ctrl-svc")
    assert state.is_replica("demo", "demo-rep1")
    assert state.is_replica("demo", "demo-rep12")
    assert not state.is_replica("demo", "demo-rep")
    assert not state.is_replica("demo", "demo-replica")
    assert not state.is_replica("demo", "demo2-rep1")


def test_synthesize_full_vsm():
    svc = ServiceRecord(name="demo-ctrl-svc", cluster_ip="10.0.0.5")
    a = state.synthesize("demo", [ctrl(), rep(1), rep(2, available=False)], svc)

    assert a == {
        lbl.CONTROLLER_STATUS_API_LBL: "Running",
        lbl.REPLICA_STATUS_API_LBL: "Running,Pending",
        lbl.REPLICA_COUNT_API_LBL: "2",
        lbl.VOLUME_SIZE_API_LBL: "1G",
        lbl.IQN_API_LBL: "iqn.2016-09.com.openebs.jiva:demo",
        lbl.CLUSTER_IPS_API_LBL: "10.0.0.5",
        lbl.TARGET_PORTALS_API_LBL: "10.0.0.5:3260",
    }


def test_synthesize_without_replicas_has_no_count_or_iqn():
    a = state.synthesize("demo", [ctrl()], ServiceRecord(name="demo-ctrl-svc", cluster_ip="10.0.0.5"))

    assert lbl.REPLICA_COUNT_API_LBL not in a
    assert lbl.IQN_API_LBL not in a
    assert a[lbl.CONTROLLER_STATUS_API_LBL] == "Running"


def test_short_args_carry_no_size():
    short = WorkloadRecord(name="demo-rep1", replicas=1, args=["replica"])
    a = state.synthesize("demo", [short], None)
    assert lbl.VOLUME_SIZE_API_LBL not in a
    assert a[lbl.REPLICA_COUNT_API_LBL] == "1"


def test_service_without_ip_adds_no_portal():
    a = state.synthesize("demo", [ctrl()], ServiceRecord(name="demo-ctrl-svc", cluster_ip=""))
    assert lbl.CLUSTER_IPS_API_LBL not in a
    assert lbl.TARGET_PORTALS_API_LBL not in a


def test_each_call_returns_a_fresh_map():
    a = state.synthesize("demo", [ctrl()], None)
    b = state.synthesize("demo", [ctrl()], None)
    a["x"] = "y"
    assert "x" not in b
