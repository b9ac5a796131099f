from __future__ import annotations

import pytest

from os_resource_simulator.backend.core import Process, ValidationError
from os_resource_simulator.backend.os_kernel import OSKernel, KernelConfig, Mode
from os_resource_simulator.backend.paging import PageReplacementResult
from os_resource_simulator.backend.utils import (
    SAMPLE_ALLOCATION,
    SAMPLE_AVAILABLE,
    SAMPLE_DISK_QUEUE,
    SAMPLE_MAX,
    SAMPLE_REFERENCES,
)

CPU_PAYLOAD = {
    "algorithm": "SRTF",
    "processes": [
        {"pid": "P1", "arrival": 0, "burst": 7, "priority": 2},
        {"pid": "P2", "arrival": 2, "burst": 4, "priority": 1},
        {"pid": "P3", "arrival": 4, "burst": 1, "priority": 3},
        {"pid": "P4", "arrival": 5, "burst": 4, "priority": 2},
    ],
}


@pytest.fixture
def kernel():
    return OSKernel()


def test_cpu_payload(kernel):
    result = kernel.run(Mode.CPU, CPU_PAYLOAD)
    assert [(s["pid"], s["start"], s["end"]) for s in result["schedule"]][:3] == [("P1", 0, 2), ("P2", 2, 4), ("P3", 4, 5)]
    assert result["utilization"] == pytest.approx(100.0)
    assert result["throughput"] == pytest.approx(0.25)
    assert len(result["metrics"]) == 4


def test_cpu_payload_uses_config_defaults():
    kernel = OSKernel(KernelConfig(cpu_policy="RR", time_quantum=3))
    payload = {"processes": [{"pid": "A", "arrival": 0, "burst": 5}, {"pid": "B", "arrival": 0, "burst": 2}]}
    schedule = kernel.run(Mode.CPU, payload)["schedule"]
    assert [(s["pid"], s["start"], s["end"]) for s in schedule] == [("A", 0, 3), ("B", 3, 5), ("A", 5, 7)]


def test_cpu_payload_quantum_overrides_config():
    kernel = OSKernel(KernelConfig(cpu_policy="RR", time_quantum=3))
    payload = {"quantum": 1, "processes": [{"pid": "A", "arrival": 0, "burst": 2}, {"pid": "B", "arrival": 0, "burst": 1}]}
    schedule = kernel.run(Mode.CPU, payload)["schedule"]
    assert [s["pid"] for s in schedule] == ["A", "B", "A"]


def test_cpu_payload_rejects_zero_quantum(kernel):
    with pytest.raises(ValidationError):
        kernel.run(Mode.CPU, dict(CPU_PAYLOAD, algorithm="RR", quantum=0))


def test_cpu_payload_missing_field(kernel):
    with pytest.raises(ValidationError):
        kernel.run(Mode.CPU, {"processes": [{"pid": "A", "burst": 2}]})


def test_page_payload_compares_both_policies(kernel):
    result = kernel.run(Mode.PAGE, {"frameCount": 3, "references": SAMPLE_REFERENCES})
    assert result["FIFO"]["faults"] == 10
    assert result["LRU"]["faults"] == 9
    assert result["LRU"]["timeline"][5]["frames"] == [2, 0, 3]


def test_page_payload_single_policy(kernel):
    result = kernel.run(Mode.PAGE, {"policy": "LRU", "frameCount": 3, "references": SAMPLE_REFERENCES})
    assert result["faults"] == 9
    assert len(result["timeline"]) == len(SAMPLE_REFERENCES)


def test_page_payload_rejects_zero_frames(kernel):
    with pytest.raises(ValidationError):
        kernel.run(Mode.PAGE, {"policy": "FIFO", "frameCount": 0, "references": [1]})


def test_run_paging_with_configured_policy():
    kernel = OSKernel(KernelConfig(page_policy="FIFO", frame_count=3))
    result = kernel.run_paging(SAMPLE_REFERENCES)
    assert isinstance(result, PageReplacementResult)
    assert result.faults == 10


def test_disk_payload(kernel):
    payload = {"algorithm": "SSTF", "requests": SAMPLE_DISK_QUEUE, "head": 53, "maxCylinder": 199}
    assert kernel.run(Mode.DISK, payload)["totalSeek"] == 236


def test_disk_payload_default_max_cylinder(kernel):
    result = kernel.run(Mode.DISK, {"algorithm": "SCAN", "requests": SAMPLE_DISK_QUEUE, "head": 53})
    assert result["totalSeek"] == 331


def test_disk_payload_requires_head(kernel):
    with pytest.raises(ValidationError):
        kernel.run(Mode.DISK, {"requests": [1, 2]})


def test_deadlock_payload(kernel):
    payload = {"available": SAMPLE_AVAILABLE, "max": SAMPLE_MAX, "allocation": SAMPLE_ALLOCATION}
    result = kernel.run(Mode.DEADLOCK, payload)
    assert result == {
        "safe": True,
        "sequence": [1, 3, 4, 0, 2],
        "need": [[7, 4, 3], [1, 2, 2], [6, 0, 0], [0, 1, 1], [4, 3, 1]],
    }


def test_deadlock_payload_dimension_mismatch(kernel):
    with pytest.raises(ValidationError):
        kernel.run(Mode.DEADLOCK, {"available": [1, 2], "max": SAMPLE_MAX, "allocation": SAMPLE_ALLOCATION})


def test_unknown_mode(kernel):
    with pytest.raises(ValidationError):
        kernel.run("filesystem", {})


def test_payload_must_be_object(kernel):
    with pytest.raises(ValidationError):
        kernel.run(Mode.DISK, [1, 2, 3])


@pytest.mark.parametrize("mode, payload", [
    (Mode.CPU, {"processes": 3}),
    (Mode.PAGE, {"policy": "FIFO", "frameCount": 3, "references": 5}),
    (Mode.DISK, {"requests": 7, "head": 53}),
])
def test_payload_sequences_must_be_lists(kernel, mode, payload):
    with pytest.raises(ValidationError):
        kernel.run(mode, payload)


def test_repeated_runs_are_identical(kernel):
    assert kernel.run(Mode.CPU, CPU_PAYLOAD) == kernel.run(Mode.CPU, CPU_PAYLOAD)


def test_run_cpu_with_process_objects(kernel):
    result = kernel.run_cpu([Process("X", 1, 2)], policy="PRIORITY")
    assert result.total_time == 3
