"""Tests für den Parser der Terminbeschreibung (Órarend infó)."""

from datetime import time

import pytest

from data.schedule_parser import (
    ScheduleParseWarning,
    parse_schedule_info,
    parse_schedule_info_detailed,
)


class TestWellFormed:
    def test_single_session(self):
        slots = parse_schedule_info("H:10:00-11:30(Room 1)")
        assert len(slots) == 1
        s = slots[0]
        assert s.day_of_week == 1
        assert s.start_time == time(10, 0)
        assert s.end_time == time(11, 30)
        assert s.location == "Room 1"

    def test_two_sessions_in_source_order(self):
        slots = parse_schedule_info("K:08:00-09:30(A); CS:14:00-15:30(B)")
        assert [(s.day_of_week, s.location) for s in slots] == [(2, "A"), (4, "B")]

    def test_source_order_not_sorted(self):
        """Slots werden nicht nach Tag oder Zeit umsortiert."""
        slots = parse_schedule_info("P:12:00-13:00(X);H:08:00-09:00(Y)")
        assert [s.day_of_week for s in slots] == [5, 1]

    @pytest.mark.parametrize("token,day", [
        ("H", 1), ("K", 2), ("SZE", 3), ("CS", 4), ("P", 5), ("SZ", 6),
    ])
    def test_all_day_tokens(self, token: str, day: int):
        slots = parse_schedule_info(f"{token}:09:00-10:00(R)")
        assert slots[0].day_of_week == day

    def test_location_trimmed_and_may_be_empty(self):
        slots = parse_schedule_info("SZE:09:00-10:00(  B/2 terem  );SZ:09:00-10:00()")
        assert slots[0].location == "B/2 terem"
        assert slots[1].location == ""

    def test_semicolon_inside_location(self):
        slots = parse_schedule_info("H:10:00-11:00(A;B); K:08:00-09:00(C)")
        assert [s.location for s in slots] == ["A;B", "C"]
        assert [s.day_of_week for s in slots] == [1, 2]

    def test_semicolon_inside_location_keeps_indices(self):
        result = parse_schedule_info_detailed(
            "H:10:00-11:00(A; B); XX:08:00-09:00(C); K:08:00-09:00(D)")
        assert [s.location for s in result.slots] == ["A; B", "D"]
        assert [(w.index, w.descriptor) for w in result.warnings] == [
            (1, "XX:08:00-09:00(C)"),
        ]

    def test_single_digit_fields(self):
        slots = parse_schedule_info("H:8:5-9:30(A)")
        assert slots[0].start_time == time(8, 5)

    def test_slots_have_no_owner_yet(self):
        assert parse_schedule_info("H:10:00-11:00(A)")[0].course_id == ""

    def test_parse_is_deterministic(self):
        raw = "K:08:00-09:30(A); CS:14:00-15:30(B)"
        assert parse_schedule_info(raw) == parse_schedule_info(raw)


class TestSilentDrop:
    def test_unknown_day_dropped(self):
        assert parse_schedule_info("XX:10:00-11:00(Z)") == []

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_input(self, raw):
        assert parse_schedule_info(raw) == []

    @pytest.mark.parametrize("raw", [
        "H:24:00-25:00(A)",        # Stunde außerhalb 0-23
        "H:10:60-11:00(A)",        # Minute außerhalb 0-59
        "H:10:00-11:00",           # Ort fehlt
        "h:10:00-11:00(A)",        # Kleinbuchstaben
        "H 10:00-11:00(A)",        # Trennzeichen fehlt
        "H:11:00-10:00(A)",        # Ende vor Beginn
        "H:10:00-10:00(A)",        # leeres Intervall
    ])
    def test_malformed_dropped(self, raw: str):
        assert parse_schedule_info(raw) == []

    def test_bad_session_does_not_abort_rest(self):
        slots = parse_schedule_info("H:10:00-11:00(A); XX:1:00-2:00(B); P:12:00-13:00(C)")
        assert [s.location for s in slots] == ["A", "C"]

    def test_trailing_separator_is_not_a_session(self):
        result = parse_schedule_info_detailed("H:10:00-11:00(A);")
        assert len(result.slots) == 1
        assert result.warnings == []


class TestWarnings:
    def test_warning_carries_descriptor_and_index(self):
        result = parse_schedule_info_detailed("H:10:00-11:00(A); XX:10:00-11:00(Z)")
        assert len(result.slots) == 1
        assert result.has_warnings
        w = result.warnings[0]
        assert isinstance(w, ScheduleParseWarning)
        assert w.descriptor == "XX:10:00-11:00(Z)"
        assert w.index == 1
        assert w.reason == "unknown_day"

    @pytest.mark.parametrize("raw,reason", [
        ("garbage", "syntax"),
        ("Q:10:00-11:00(A)", "unknown_day"),
        ("H:10:75-11:00(A)", "invalid_time"),
        ("H:12:00-11:00(A)", "empty_interval"),
    ])
    def test_reasons(self, raw: str, reason: str):
        assert parse_schedule_info_detailed(raw).warnings[0].reason == reason

    def test_str_is_readable(self):
        w = parse_schedule_info_detailed("garbage").warnings[0]
        assert "garbage" in str(w)
