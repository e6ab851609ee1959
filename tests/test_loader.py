import json
from datetime import datetime, timezone
from ipaddress import IPv4Address, IPv6Address

import pytest

from events import EventCategory, MisalignedEndpointsError, TriageScore
from events.conn import BlocklistConn, MultiHostPortScan
from events.loader import EventLoadError, event_from_dict, load_events
from renderers import render_display

TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def record(**overrides):
    data = {
        "kind": "BlocklistConn",
        "time": "2024-01-02T03:04:05Z",
        "sensor": "sensor-1",
        "proto": 6,
        "confidence": 1,
        "orig_addr": "10.0.0.1",
        "orig_port": 51000,
        "orig_country_code": "US",
        "resp_addr": "2001:db8::1",
        "resp_country_code": [255, 254],
        "start_time": 1704164645000000000,
    }
    data.update(overrides)
    return data


def test_event_from_dict_converts_values():
    event = event_from_dict(record())

    assert isinstance(event, BlocklistConn)
    assert event.time == TIME
    assert event.start_time == TIME
    assert event.orig_addr == IPv4Address("10.0.0.1")
    assert event.resp_addr == IPv6Address("2001:db8::1")
    assert event.orig_country_code == b"US"
    assert event.resp_country_code == b"\xff\xfe"
    assert event.confidence == 1.0
    assert event.resp_port is None


def test_loaded_event_renders():
    line = render_display(event_from_dict(record()))
    assert " orig_country_code=US resp_addr=2001:db8::1 resp_port=- resp_country_code=XX proto=6 " in line
    assert " confidence=1.0 " in line


def test_category_by_value_or_name():
    assert event_from_dict(record(category="Reconnaissance")).category is EventCategory.RECONNAISSANCE
    assert event_from_dict(record(category="COMMAND_AND_CONTROL")).category is EventCategory.COMMAND_AND_CONTROL


def test_nested_values():
    event = event_from_dict(record(triage_scores=[{"policy_id": 1, "score": 0.5}]))
    assert event.triage_scores == (TriageScore(policy_id=1, score=0.5),)


def test_aggregate_record():
    event = event_from_dict({
        "kind": "multi host port scan",
        "time": "2024-01-02T03:04:05+00:00",
        "sensor": "s",
        "proto": 6,
        "confidence": 0.5,
        "orig_addrs": ["10.0.0.1", "10.0.0.2"],
        "orig_ports": [1, 2],
        "orig_country_codes": ["US", "KR"],
        "resp_addrs": ["10.0.1.1"],
        "resp_ports": [445],
        "resp_country_codes": [None],
        "start_time": "2024-01-02T03:04:05+00:00",
        "end_time": "2024-01-02T03:04:05+00:00",
    })
    assert isinstance(event, MultiHostPortScan)
    assert event.orig_country_codes == (b"US", b"KR")
    assert " orig_country_codes=[US,KR] " in render_display(event)


def test_python_keyword_keys():
    data = record(kind="BlocklistSmtp")
    data["from"] = "a@example.com"
    event = event_from_dict(data)
    assert event.from_ == "a@example.com"


def test_misaligned_record_propagates():
    data = record(kind="ExternalDdos", orig_addrs=["10.0.0.1"], orig_ports=[], orig_country_codes=[],
                  end_time="2024-01-02T03:04:05Z")
    for key in ("orig_addr", "orig_port", "orig_country_code"):
        del data[key]
    with pytest.raises(MisalignedEndpointsError):
        event_from_dict(data)


@pytest.mark.parametrize("data, message", [
    (record(kind="Nope"), "Unknown event kind"),
    ({"sensor": "s"}, "missing its 'kind'"),
    (record(bogus=1), "has no field 'bogus'"),
    (record(orig_addr="not-an-ip"), "BlocklistConn.orig_addr"),
    (record(time=[1]), "BlocklistConn.time"),
    (record(kind="NetworkThreat"), "rule_id"),
    ([1, 2], "must be an object"),
])
def test_invalid_records(data, message):
    with pytest.raises(EventLoadError, match=message):
        event_from_dict(data)


def test_load_events_list(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([record(), record(sensor="sensor-2")]), encoding="utf-8")

    events = load_events(str(path))
    assert [event.sensor for event in events] == ["sensor-1", "sensor-2"]


def test_load_events_single_object(tmp_path):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(record()), encoding="utf-8")
    assert len(load_events(str(path))) == 1


def test_load_events_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_events(str(tmp_path / "missing.json"))


def test_load_events_bad_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(EventLoadError, match="Invalid JSON"):
        load_events(str(path))


@pytest.mark.parametrize("overrides, message", [
    ({"orig_port": "eighty", "proto": "tcp"}, "BlocklistConn.orig_port"),
    ({"proto": "tcp"}, "BlocklistConn.proto"),
    ({"proto": 6.0}, "BlocklistConn.proto"),
    ({"sensor": 5}, "BlocklistConn.sensor"),
    ({"confidence": "0.9"}, "BlocklistConn.confidence"),
    ({"resp_port": [1, 2]}, "BlocklistConn.resp_port"),
    ({"category": "Nope"}, "BlocklistConn.category"),
    ({"resp_country_code": [300, 1]}, "BlocklistConn.resp_country_code"),
])
def test_values_must_have_their_json_type(overrides, message):
    with pytest.raises(EventLoadError, match=message):
        event_from_dict(record(**overrides))


def test_every_invalid_field_is_reported():
    with pytest.raises(EventLoadError) as excinfo:
        event_from_dict(record(orig_port="eighty", proto="tcp"))
    assert "BlocklistConn.orig_port" in str(excinfo.value)
    assert "BlocklistConn.proto" in str(excinfo.value)


@pytest.mark.parametrize("start_time", [10 ** 30, -(10 ** 30)])
def test_out_of_range_timestamp(start_time):
    with pytest.raises(EventLoadError, match="BlocklistConn.start_time"):
        event_from_dict(record(start_time=start_time))


def test_nested_value_errors_name_their_path():
    with pytest.raises(EventLoadError, match=r"BlocklistConn\.triage_scores\..*policy_id"):
        event_from_dict(record(triage_scores=[{"policy_id": "one", "score": 0.5}]))


def test_port_scan_null_ports():
    event = event_from_dict(record(kind="PortScan", resp_ports=None, end_time="2024-01-02T03:04:05Z"))

    assert event.resp_ports == ()
    assert " resp_ports=[] " in render_display(event)


def test_port_scan_ports_render_plural():
    data = record(kind="PortScan", resp_ports=[22, 80], end_time="2024-01-02T03:04:05Z")
    assert " resp_ports=[22,80] " in render_display(event_from_dict(data))


def test_python_values_are_accepted():
    data = record(time=TIME, orig_addr=IPv4Address("10.0.0.1"), orig_country_code=b"US")
    event = event_from_dict(data)
    assert event.time == TIME
    assert event.orig_country_code == b"US"
