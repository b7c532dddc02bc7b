import pytest

from licensematch.core import TemplateComparison, TemplateEvent, compare_template, replay
from licensematch.core.errors import UsageError

EVENTS = [
    TemplateEvent.literal("Copyright "),
    TemplateEvent.variable("YEAR", "[0-9]{4}", "2024"),
    TemplateEvent.literal(" ACME"),
]

def test_verdict_before_completion_is_a_usage_error():
    cmp = TemplateComparison("Copyright 2024 ACME")
    cmp.literal_text("Copyright ")
    with pytest.raises(UsageError):
        cmp.matches()
    with pytest.raises(UsageError):
        cmp.get_differences()

def test_event_handler_interface():
    cmp = TemplateComparison("Licensed (see NOTICE).")
    cmp.literal_text("Licensed")
    cmp.begin_optional()
    cmp.literal_text(" (see NOTICE)")
    cmp.end_optional()
    cmp.literal_text(".")
    assert not cmp.completed
    cmp.complete_parsing()
    assert cmp.completed
    assert cmp.matches() is True
    diff = cmp.get_differences()
    assert diff.difference_found is False
    assert diff.message == "No difference found"
    assert diff.differences == []

def test_complete_parsing_twice_is_a_no_op():
    cmp = TemplateComparison("Copyright ACME")
    replay(EVENTS, cmp)
    first = cmp.get_differences()
    cmp.complete_parsing()
    assert cmp.get_differences() is first

def test_events_after_completion_are_rejected():
    cmp = compare_template(EVENTS, "Copyright 2024 ACME")
    with pytest.raises(UsageError):
        cmp.literal_text("more")

def test_fresh_instances_give_identical_verdicts():
    texts = ["Copyright 2024 ACME", "Copyright ACME", "Copyright 24 ACME Corp"]
    for text in texts:
        a = compare_template(EVENTS, text).get_differences()
        b = compare_template(EVENTS, text).get_differences()
        assert a == b

def test_difference_description_to_dict():
    d = compare_template(EVENTS, "Copyright ACME").get_differences().to_dict()
    assert d["difference_found"] is True
    assert d["differences"] == [{"line": 1, "column": 10, "length": 4}]
    assert "YEAR" in d["message"]
