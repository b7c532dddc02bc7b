from licensematch.core import TemplateEvent, compare_template
from licensematch.core.differences import LineColumn
from licensematch.reporting import build_excerpt, build_json_report, format_text_report

EVENTS = [TemplateEvent.literal("Line one\nline two")]

def test_excerpt_marks_location():
    ex = build_excerpt("Line one\nline three", LineColumn(2, 5, 5))
    assert ex[0] == "    2 | line three"
    assert ex[1] == " " * (len("    2 | ") + 5) + "^^^^^"

def test_excerpt_out_of_range_line():
    assert build_excerpt("only one line", LineColumn(3, 0, 1)) == []

def test_json_report():
    text = "Line one\nline three"
    diff = compare_template(EVENTS, text).get_differences()
    report = build_json_report(diff, text)
    assert report["matched"] is False
    assert report["differences"] == [{"line": 2, "column": 5, "length": 5}]
    assert "^^^^^" in report["excerpts"][0]

def test_text_report_for_match_and_divergence():
    ok = compare_template(EVENTS, "Line one\nline two").get_differences()
    out = format_text_report(ok, title="Check")
    assert "Check" in out
    assert "Matched: True" in out
    assert "Differences:" not in out

    text = "Line one\nline three"
    bad = compare_template(EVENTS, text).get_differences()
    out = format_text_report(bad, text)
    assert "Matched: False" in out
    assert "line 2, column 5, length 5" in out
    assert "line three" in out
