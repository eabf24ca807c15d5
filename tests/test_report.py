import json
from email.message import Message

from balancekv.report import REPORT_MAX_LEN, Report


def test_process_accumulates_and_trims():
    headers = {"lb-author": "test-author", "lb-req-cnt": "1"}
    r = Report()

    r.process(headers)
    assert r["test-author"] == ["1"]

    headers["lb-req-cnt"] = "2"
    r.process(headers)
    assert r["test-author"] == ["1", "2"]

    headers["lb-author"] = "test-len"
    for _ in range(103):
        headers["lb-req-cnt"] = "test-len"
        r.process(headers)
    assert len(r["test-len"]) == REPORT_MAX_LEN


def test_trim_keeps_latest_counters():
    r = Report()
    for i in range(103):
        r.process({"lb-author": "a", "lb-req-cnt": str(i)})
    assert r["a"][0] == "3"
    assert r["a"][-1] == "102"


def test_missing_author_is_ignored():
    r = Report()
    r.process({"lb-req-cnt": "1"})
    assert dict(r) == {}


def test_header_names_are_case_insensitive():
    headers = Message()
    headers["Lb-Author"] = "x"
    headers["LB-REQ-CNT"] = "7"
    r = Report()
    r.process(headers)
    assert r["x"] == ["7"]


def test_to_json_round_trip():
    r = Report()
    r.process({"lb-author": "a", "lb-req-cnt": "1"})
    r.process({"lb-author": "b", "lb-req-cnt": "2"})
    encoded = r.to_json()
    assert encoded.endswith("\n")
    assert json.loads(encoded) == {"a": ["1"], "b": ["2"]}