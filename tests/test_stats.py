from balancekv.stats import trim_report


def test_trim_keeps_last_five():
    report = {"a": ["1", "2", "3", "4", "5", "6", "7"]}
    assert trim_report(report) == {"a": ["3", "4", "5", "6", "7"]}


def test_trim_leaves_short_lists():
    report = {"a": ["1", "2"], "b": []}
    assert trim_report(report) == {"a": ["1", "2"], "b": []}


def test_trim_does_not_mutate_input():
    entries = ["1", "2", "3", "4", "5", "6"]
    report = {"a": entries}
    result = trim_report(report, 2)
    assert result == {"a": ["5", "6"]}
    assert report["a"] == ["1", "2", "3", "4", "5", "6"]


def test_trim_limit_zero_empties_lists():
    assert trim_report({"a": ["1", "2"]}, 0) == {"a": []}


def test_trim_keeps_null_entries_and_keys():
    report = {"a": None, "b": ["x"]}
    result = trim_report(report)
    assert result == {"a": None, "b": ["x"]}
    assert set(result) == set(report)


def test_trim_empty_report():
    assert trim_report({}) == {}