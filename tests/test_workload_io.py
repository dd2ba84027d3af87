import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from schedsim.workload_io import (
    InvalidInputError,
    Workload,
    load_workload,
    normalize_quantum,
    normalize_workload,
    prompt_workload,
    workload_from_lists,
)


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":5},'
                 '{"arrival_time":1,"burst_time":3}]')
    workload = load_workload(p)
    assert isinstance(workload, Workload)
    assert workload.arrival == [0, 1]
    assert workload.burst == [5, 3]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,5\nB,2,1\n")
    workload = load_workload(p)
    assert workload.arrival == [0, 2]
    assert workload.burst == [5, 1]
    assert len(workload) == 2


def test_load_rejects_bad_entry(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,x\n")
    with pytest.raises(InvalidInputError):
        load_workload(p)


def test_load_rejects_non_list_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"arrival_time": 0, "burst_time": 1}')
    with pytest.raises(InvalidInputError):
        load_workload(p)


def test_load_rejects_unknown_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(InvalidInputError):
        load_workload(p)


def test_inline_lists_must_match():
    assert workload_from_lists([0, 1], [2, 3]).burst == [2, 3]
    with pytest.raises(InvalidInputError):
        workload_from_lists([0, 1], [2])


def test_normalize_clamps_negatives(caplog):
    with caplog.at_level(logging.WARNING):
        workload = normalize_workload(Workload(arrival=[-2, 1], burst=[3, -1]))
    assert workload.arrival == [0, 1]
    assert workload.burst == [3, 0]
    assert "clamped" in caplog.text


def test_normalize_strict_rejects():
    with pytest.raises(InvalidInputError):
        normalize_workload(Workload(arrival=[-2], burst=[3]), strict=True)


def test_normalize_quantum():
    assert normalize_quantum(3) == 3
    assert normalize_quantum(0) == 1
    assert normalize_quantum(-4) == 1
    with pytest.raises(InvalidInputError):
        normalize_quantum(0, strict=True)


def test_prompt_workload_reads_bursts_then_arrivals():
    console = Console(file=io.StringIO())
    stream = io.StringIO("3\n5\n3\n2\n0\n1\n2\n2\n")
    workload, quantum = prompt_workload(console, stream=stream)
    assert workload.burst == [5, 3, 2]
    assert workload.arrival == [0, 1, 2]
    assert quantum == 2


def test_prompt_workload_zero_processes():
    console = Console(file=io.StringIO())
    workload, quantum = prompt_workload(console, stream=io.StringIO("0\n"))
    assert len(workload) == 0


@pytest.mark.parametrize("value", ["1.5", "true", "2.0"])
def test_load_json_rejects_non_integer_times(tmp_path: Path, value):
    p = tmp_path / "w.json"
    p.write_text(f'[{{"arrival_time": {value}, "burst_time": 3}}]')
    with pytest.raises(InvalidInputError):
        load_workload(p)
