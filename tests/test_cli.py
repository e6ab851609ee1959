import argparse
import json
from pathlib import Path

import pytest
from colorama import Fore, Style

import main
from events.loader import event_from_dict

SAMPLES = Path(__file__).resolve().parent.parent / "samples" / "events.json"

RECORD = {
    "kind": "BlocklistConn",
    "time": "2024-01-02T03:04:05Z",
    "sensor": "sensor-1",
    "proto": 6,
    "confidence": 0.9,
    "orig_addr": "10.0.0.1",
    "orig_port": 51000,
    "orig_country_code": "US",
    "resp_addr": "192.168.0.5",
    "resp_port": 80,
    "resp_country_code": "KR",
    "start_time": "2024-01-02T03:04:05Z",
}


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([RECORD]), encoding="utf-8")
    return path


def output_lines(capsys):
    return [line for line in capsys.readouterr().out.splitlines() if line]


def test_list_kinds(capsys):
    assert main.main(["--list-kinds"]) == 0

    out = capsys.readouterr().out
    assert "Supported Event Kinds" in out
    assert "MultiHostPortScan" in out
    assert "multi host port scan" in out
    assert "+---" in out


def test_display_output(events_file, capsys):
    assert main.main([str(events_file), "--no-color"]) == 0

    lines = output_lines(capsys)
    assert len(lines) == 1
    assert lines[0].startswith("BlocklistConn { category=Unspecified sensor=\"sensor-1\" orig_addr=10.0.0.1 ")


def test_syslog_output(events_file, capsys):
    args = [str(events_file), "-f", "syslog", "--hostname", "sensor-01", "--facility", "auth", "--app-name", "ids"]
    assert main.main(args) == 0

    lines = output_lines(capsys)
    assert len(lines) == 1
    assert lines[0].startswith("<36>1 2024-01-02T03:04:05+00:00 sensor-01 ids ")
    assert " BlocklistConn - category=Unspecified " in lines[0]


def test_both_forms_share_pairs(events_file, capsys):
    assert main.main([str(events_file), "-f", "both", "--no-color", "--hostname", "h"]) == 0

    display, syslog = output_lines(capsys)
    pairs = display[len("BlocklistConn { "):-2]
    assert syslog.endswith(f" - {pairs}")


def test_output_file_is_appended(events_file, tmp_path):
    out = tmp_path / "out.log"
    assert main.main([str(events_file), "-o", str(out)]) == 0
    assert main.main([str(events_file), "-o", str(out)]) == 0

    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0] == lines[1]
    assert lines[0].startswith("BlocklistConn { ")


def test_sample_file_renders(capsys):
    assert main.main([str(SAMPLES), "--no-color"]) == 0
    kinds = [line.split(" ", 1)[0] for line in output_lines(capsys)]
    assert kinds == ["PortScan", "MultiHostPortScan", "BlocklistConn", "NetworkThreat"]


def test_missing_events_file(tmp_path):
    assert main.main([str(tmp_path / "missing.json")]) == 1


def test_invalid_events_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{**RECORD, "bogus": 1}]), encoding="utf-8")
    assert main.main([str(path), "-q"]) == 1


def test_misaligned_events_file(tmp_path):
    record = {key: value for key, value in RECORD.items() if not key.startswith("orig_")}
    record.update({
        "kind": "ExternalDdos",
        "orig_addrs": ["10.0.0.1", "10.0.0.2"],
        "orig_ports": [1],
        "orig_country_codes": ["US", "KR"],
        "end_time": "2024-01-02T03:04:05Z",
    })
    del record["resp_port"]
    path = tmp_path / "misaligned.json"
    path.write_text(json.dumps(record), encoding="utf-8")
    assert main.main([str(path)]) == 1


def test_missing_config_file(events_file, tmp_path):
    assert main.main([str(events_file), "--config", str(tmp_path / "missing.yaml")]) == 1


def test_events_file_required():
    with pytest.raises(SystemExit) as excinfo:
        main.main([])
    assert excinfo.value.code == 2


def test_build_header_uses_level_severity():
    event = event_from_dict(dict(RECORD))
    args = argparse.Namespace(facility="local4", hostname="sensor-01", app_name=None)

    header = main.build_header(event, args)

    assert header.priority == 20 * 8 + 4
    assert header.msgid == "BlocklistConn"
    assert header.timestamp == event.time
    assert header.app_name == "eventrender"


def test_colorize_highlights_kind_name():
    event = event_from_dict(dict(RECORD))
    line = main.colorize("BlocklistConn { x=1 }", event)
    assert line == f"{Fore.CYAN}BlocklistConn{Style.RESET_ALL} {{ x=1 }}"
