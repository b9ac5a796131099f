import pytest

from os_resource_simulator.backend.manual_terminal import ManualTerminal, format_frames, split_flags


@pytest.fixture
def terminal():
    return ManualTerminal()


def test_add_and_run(terminal, capsys):
    terminal.handle_command("add P1 5 1")
    terminal.handle_command("add P2 2 0 1")
    terminal.handle_command("run --policy SJF")
    out = capsys.readouterr().out
    assert "P1: 0-5" in out
    assert "P2: 5-7" in out
    assert terminal.last_result.policy == "SJF"


def test_duplicate_pid_rejected(terminal, capsys):
    terminal.handle_command("add P1 5 1")
    terminal.handle_command("add P1 3 1")
    assert len(terminal.processes) == 1
    assert "already exists" in capsys.readouterr().out


def test_invalid_quantum_reported(terminal, capsys):
    terminal.handle_command("add P1 5 1")
    terminal.handle_command("run --policy RR --quantum 0")
    assert "Invalid input" in capsys.readouterr().out
    assert terminal.last_result is None


def test_stats_after_run(terminal, capsys):
    terminal.handle_command("stats")
    assert "No simulation yet" in capsys.readouterr().out
    terminal.handle_command("add P1 4 1")
    terminal.handle_command("run")
    terminal.handle_command("stats")
    assert "CPU utilization: 100.0%" in capsys.readouterr().out


def test_page_command(terminal, capsys):
    terminal.handle_command("page --frames 3 7 0 1 2 0 3 0 4 2 3 0 3 2")
    out = capsys.readouterr().out
    assert "FIFO: 10 faults" in out
    assert "LRU: 9 faults" in out


def test_disk_command(terminal, capsys):
    terminal.handle_command("disk --algorithm SSTF --head 53 98 183 37 122 14 124 65 67")
    assert "Total seek: 236" in capsys.readouterr().out


def test_bank_command(terminal, capsys):
    terminal.handle_command("bank")
    assert "P1 -> P3 -> P4 -> P0 -> P2" in capsys.readouterr().out


def test_unknown_and_exit(terminal, capsys):
    terminal.handle_command("frobnicate")
    assert "Unknown command" in capsys.readouterr().out
    with pytest.raises(SystemExit):
        terminal.handle_command("exit")


def test_helpers():
    assert format_frames((1, None, 3)) == "1 - 3"
    assert split_flags(["--frames", "4", "1", "2"], ("--frames",)) == ({"--frames": "4"}, ["1", "2"])
