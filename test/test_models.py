import pytest

from tasknotes_nlp.models import ExtractionConfig, ParsedTaskData


def test_parsed_task_defaults():
    p = ParsedTaskData(title="Test")
    assert p.tags == []
    assert p.contexts == []
    assert p.due_date is None
    assert p.to_rrule() is None


def test_parsed_task_is_frozen():
    p = ParsedTaskData(title="Test")
    with pytest.raises(Exception):
        p.title = "Other"


def test_parsed_task_rejects_empty_title_and_zero_estimate():
    with pytest.raises(Exception):
        ParsedTaskData(title="")
    with pytest.raises(Exception):
        ParsedTaskData(title="X", estimate=0)


def test_camel_case_dump():
    p = ParsedTaskData(title="X", due_date="2025-01-02", days_of_week=["Monday"], recurrence="weekly")
    out = p.model_dump(by_alias=True, exclude_none=True)
    assert out["dueDate"] == "2025-01-02"
    assert out["daysOfWeek"] == ["Monday"]
    assert "due_date" not in out


def test_to_rrule():
    assert ParsedTaskData(title="X", recurrence="daily").to_rrule() == "FREQ=DAILY"
    assert (
        ParsedTaskData(title="X", recurrence="weekly", recurrence_interval=2).to_rrule()
        == "FREQ=WEEKLY;INTERVAL=2"
    )
    assert (
        ParsedTaskData(title="X", recurrence="weekly", days_of_week=["Monday"]).to_rrule()
        == "FREQ=WEEKLY;BYDAY=MO"
    )
    assert (
        ParsedTaskData(
            title="X", recurrence="monthly", days_of_week=["Friday"], recurrence_position=-1
        ).to_rrule()
        == "FREQ=MONTHLY;BYDAY=FR;BYSETPOS=-1"
    )


def test_config_accepts_camel_case():
    cfg = ExtractionConfig.model_validate(
        {"statusConfigs": [{"value": "backlog", "label": "Backlog"}], "defaultToScheduled": False}
    )
    assert cfg.status_configs[0].value == "backlog"
    assert cfg.default_to_scheduled is False
    assert cfg.max_input_length == 5000
