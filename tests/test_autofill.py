"""Tests for title pattern detection and autofill."""

from pagecloner.titles import autofill, detect_pattern


def test_number_sequence_continues_with_detected_step():
    assert autofill(["Sprint 4", "Sprint 6", ""], 4) == ["Sprint 4", "Sprint 6", "Sprint 8", "Sprint 10"]


def test_number_sequence_keeps_zero_padding():
    assert autofill(["Issue 01", "Issue 02"], 4) == ["Issue 01", "Issue 02", "Issue 03", "Issue 04"]


def test_month_with_year_rolls_over():
    result = autofill(["Report November 2025", "Report December 2025"], 4)
    assert result[2:] == ["Report January 2026", "Report February 2026"]
    assert detect_pattern(result[:2]).label == "monthly progression with year"


def test_bare_months_cycle():
    assert autofill(["November", "December"], 4) == ["November", "December", "January", "February"]


def test_embedded_month_is_case_insensitive():
    assert autofill(["marketing march", "marketing april"], 3)[2] == "marketing May"


def test_quarter_with_year_is_not_mistaken_for_a_number():
    pattern = detect_pattern(["Q3 2025", "Q4 2025"])
    assert pattern.kind == "quarter_year"
    assert autofill(["Q3 2025", "Q4 2025"], 4) == ["Q3 2025", "Q4 2025", "Q1 2026", "Q2 2026"]


def test_bare_quarters_cycle():
    assert autofill(["Plan Q3", "Plan Q4"], 3)[2] == "Plan Q1"


def test_weekly_dates_keep_two_digit_year():
    result = autofill(["Standup 1/21/26", "Standup 1/28/26"], 3)
    assert result[2] == "Standup 2/4/26"
    assert detect_pattern(result).label == "weekly dates"


def test_no_pattern_returns_input_unchanged():
    titles = ["Alpha", "Beta", ""]
    assert detect_pattern(titles) is None
    assert autofill(titles, 5) == titles


def test_needs_two_filled_titles():
    assert detect_pattern(["Sprint 1", "", "Sprint 3"]) is None


def test_irregular_steps_are_not_a_pattern():
    assert detect_pattern(["Part 1", "Part 2", "Part 4"]) is None


def test_count_not_larger_than_filled_titles_is_a_no_op():
    titles = ["Sprint 1", "Sprint 2", "Sprint 3"]
    assert autofill(titles, 2) == titles
