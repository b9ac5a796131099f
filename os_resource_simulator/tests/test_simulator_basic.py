import pytest

from os_resource_simulator.backend.core import Process, ValidationError
from os_resource_simulator.backend.simulator import simulate, Scheduler
from os_resource_simulator.backend.utils import SAMPLE_PROCESSES


def metrics_by_pid(result):
    return {m.pid: m for m in result.metrics}


def test_fcfs_metrics():
    result = simulate(SAMPLE_PROCESSES, policy=Scheduler.FCFS)
    m = metrics_by_pid(result)

    assert (m["P2"].start, m["P2"].completion, m["P2"].turnaround, m["P2"].waiting, m["P2"].response) == (7, 11, 9, 5, 5)
    assert (m["P4"].start, m["P4"].completion, m["P4"].turnaround, m["P4"].waiting, m["P4"].response) == (12, 16, 11, 7, 7)
    assert result.avg_waiting_time == pytest.approx(4.75)
    assert result.avg_turnaround_time == pytest.approx(8.75)
    assert result.avg_response_time == pytest.approx(4.75)
    assert result.utilization == pytest.approx(100.0)
    assert result.throughput == pytest.approx(0.25)
    assert result.total_time == 16
    assert result.context_switches == 3


def test_srtf_metrics_span_preempted_segments():
    result = simulate(SAMPLE_PROCESSES, policy=Scheduler.SRTF)
    m = metrics_by_pid(result)

    assert (m["P1"].start, m["P1"].completion, m["P1"].waiting, m["P1"].response) == (0, 16, 9, 0)
    assert (m["P2"].start, m["P2"].completion, m["P2"].waiting) == (2, 7, 1)
    assert result.avg_waiting_time == pytest.approx(3.0)
    assert result.avg_turnaround_time == pytest.approx(7.0)
    assert result.context_switches == 5


def test_rr_metrics():
    result = simulate(SAMPLE_PROCESSES, policy=Scheduler.RR, time_quantum=2)
    m = metrics_by_pid(result)

    assert [(x.waiting, x.response) for x in (m["P1"], m["P2"], m["P3"], m["P4"])] == [(9, 0), (3, 0), (2, 2), (6, 4)]
    assert result.context_switches == 8


@pytest.mark.parametrize("policy", Scheduler.ALL)
def test_waiting_and_response_never_negative(policy):
    result = simulate(SAMPLE_PROCESSES, policy=policy, time_quantum=1)
    for m in result.metrics:
        assert m.waiting >= 0
        assert m.response >= 0
        assert m.turnaround == m.waiting + m.burst


def test_idle_time_lowers_utilization():
    procs = [Process("P1", 0, 2), Process("P2", 5, 3)]
    result = simulate(procs, policy=Scheduler.FCFS)
    assert result.utilization == pytest.approx(62.5)
    assert result.throughput == pytest.approx(0.25)


def test_span_starts_at_first_arrival():
    result = simulate([Process("P1", 3, 2)], policy=Scheduler.SJF)
    assert [(s.start, s.end) for s in result.schedule] == [(3, 5)]
    assert result.utilization == pytest.approx(100.0)
    assert result.throughput == pytest.approx(0.5)


def test_empty_workload():
    result = simulate([], policy=Scheduler.RR)
    assert result.schedule == []
    assert result.metrics == []
    assert result.utilization == 0
    assert result.throughput == 0
    assert result.total_time == 0
    assert result.avg_waiting_time == 0


@pytest.mark.parametrize("policy", Scheduler.ALL)
def test_simulation_is_idempotent(policy):
    first = simulate(SAMPLE_PROCESSES, policy=policy)
    second = simulate(SAMPLE_PROCESSES, policy=policy)
    assert first.to_dict() == second.to_dict()
    assert first.logger.timeline == second.logger.timeline


def test_policy_names_are_case_insensitive():
    assert simulate(SAMPLE_PROCESSES, policy="srtf").policy == Scheduler.SRTF


def test_unknown_policy():
    with pytest.raises(ValidationError):
        simulate(SAMPLE_PROCESSES, policy="LOTTERY")


def test_rr_rejects_non_positive_quantum():
    with pytest.raises(ValidationError):
        simulate(SAMPLE_PROCESSES, policy=Scheduler.RR, time_quantum=0)


def test_to_dict_shape():
    data = simulate(SAMPLE_PROCESSES, policy=Scheduler.FCFS).to_dict()
    assert set(data) == {"schedule", "metrics", "utilization", "throughput"}
    assert data["schedule"][0] == {"pid": "P1", "start": 0, "end": 7}
    assert data["metrics"][0]["pid"] == "P1"


def test_to_dataframe():
    df = simulate(SAMPLE_PROCESSES, policy=Scheduler.PRIORITY).to_dataframe()
    assert list(df["pid"]) == ["P1", "P2", "P3", "P4"]
    assert list(df["completion"]) == [7, 11, 16, 15]
    assert "waiting" in df.columns


def test_event_trace():
    result = simulate(SAMPLE_PROCESSES, policy=Scheduler.SRTF)
    events = [(e["time"], e["pid"], e["event"]) for e in result.logger.process_events]
    assert (2, "P1", "preempt") in events
    assert (16, "P1", "complete") in events
    assert len(result.logger.timeline) == len(result.schedule)
    assert all(t["policy"] == "SRTF" for t in result.logger.timeline)
