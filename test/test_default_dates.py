from conftest import REFERENCE
from extraction.date_fields import DateFields
from extraction.default_dates import extract_default_dates


def test_bare_date_goes_to_scheduled(tomorrow_engine):
    fields, rest = extract_default_dates("Meeting tomorrow", tomorrow_engine, REFERENCE, DateFields(), True)
    assert fields.scheduled_date == "2025-01-02"
    assert fields.due_date is None
    assert rest == "Meeting"


def test_bare_date_goes_to_due(tomorrow_engine):
    fields, _ = extract_default_dates("Meeting tomorrow", tomorrow_engine, REFERENCE, DateFields(), False)
    assert fields.due_date == "2025-01-02"
    assert fields.scheduled_date is None


def test_filled_target_uses_other_field(tomorrow_engine):
    fields, _ = extract_default_dates(
        "Meeting tomorrow", tomorrow_engine, REFERENCE, DateFields(scheduled_date="2025-01-05"), True
    )
    assert fields.scheduled_date == "2025-01-05"
    assert fields.due_date == "2025-01-02"


def test_nothing_open_skips_engine(tomorrow_engine):
    start = DateFields(due_date="2025-01-05", scheduled_date="2025-01-04")
    fields, rest = extract_default_dates("Meeting tomorrow", tomorrow_engine, REFERENCE, start, True)
    assert fields == start
    assert rest == "Meeting tomorrow"
    assert tomorrow_engine.calls == []


def test_range_maps_start_and_end(fake_engine_factory, point):
    engine = fake_engine_factory({"jan 6 to jan 10": (point(2025, 1, 6), point(2025, 1, 10))})
    fields, rest = extract_default_dates("Conference jan 6 to jan 10", engine, REFERENCE, DateFields(), False)
    assert fields.scheduled_date == "2025-01-06"
    assert fields.due_date == "2025-01-10"
    assert rest == "Conference"


def test_time_certainty(fake_engine_factory, point):
    hour_only = fake_engine_factory({"tomorrow at 3pm": (point(2025, 1, 2, 15, known=("day", "hour")), None)})
    fields, _ = extract_default_dates("Call tomorrow at 3pm", hour_only, REFERENCE, DateFields(), True)
    assert fields.scheduled_time == "15:00"

    exact = fake_engine_factory(
        {"tomorrow at 3:30pm": (point(2025, 1, 2, 15, 30, known=("day", "hour", "minute")), None)}
    )
    fields, _ = extract_default_dates("Call tomorrow at 3:30pm", exact, REFERENCE, DateFields(), True)
    assert fields.scheduled_time == "15:30"

    implied = fake_engine_factory({"tomorrow": (point(2025, 1, 2, 9, 0, known=("day",)), None)})
    fields, _ = extract_default_dates("Call tomorrow", implied, REFERENCE, DateFields(), True)
    assert fields.scheduled_time is None


def test_recurrence_anchors_are_skipped(fake_engine_factory, point):
    engine = fake_engine_factory({"monday": (point(2025, 1, 6), None)})
    fields, rest = extract_default_dates("Gym every monday", engine, REFERENCE, DateFields(), True)
    assert fields == DateFields()
    assert rest == "Gym every monday"

    engine = fake_engine_factory({"mondays": (point(2025, 1, 6), None)})
    fields, rest = extract_default_dates("Workout on mondays", engine, REFERENCE, DateFields(), True)
    assert fields == DateFields()
    assert rest == "Workout on mondays"


def test_first_usable_match_after_anchor(fake_engine_factory, point):
    engine = fake_engine_factory(
        {
            "monday": (point(2025, 1, 6), None),
            "tomorrow": (point(2025, 1, 2), None),
        }
    )
    fields, rest = extract_default_dates(
        "Gym every monday starting tomorrow", engine, REFERENCE, DateFields(), True
    )
    assert fields.scheduled_date == "2025-01-02"
    assert rest == "Gym every monday starting"


def test_engine_error_falls_back_to_regex(fake_engine_factory):
    engine = fake_engine_factory(error=RuntimeError("engine down"))
    fields, rest = extract_default_dates("Call mom tomorrow at 3pm", engine, REFERENCE, DateFields(), True)
    assert fields.scheduled_date == "2025-01-02"
    assert fields.scheduled_time == "15:00"
    assert rest == "Call mom"


def test_recurrence_anchor_keeps_its_time(fake_engine_factory, point):
    engine = fake_engine_factory(
        {"monday at 7am": (point(2025, 1, 6, 7, known=("day", "hour")), None)}
    )
    fields, rest = extract_default_dates("Gym every monday at 7am", engine, REFERENCE, DateFields(), True)
    assert fields.scheduled_date == "2025-01-06"
    assert fields.scheduled_time == "07:00"
    assert rest == "Gym every monday"

    engine = fake_engine_factory(
        {"mondays at 7am": (point(2025, 1, 6, 7, known=("day", "hour")), None)}
    )
    fields, rest = extract_default_dates("Workout on mondays at 7am", engine, REFERENCE, DateFields(), True)
    assert fields.scheduled_time == "07:00"
    assert rest == "Workout on mondays"
