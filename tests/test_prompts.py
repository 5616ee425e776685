import json

from schedule_sensei.models import Task
from schedule_sensei.prompts import (
    FULL_ANALYSIS_JSON_MARKER,
    QUESTION_JSON_MARKER,
    QUESTION_MARKER,
    build_prompt,
    serialize_tasks,
)

RULE = "─" * 56 + "\n"


def test_blank_question_uses_full_analysis_template(excavate_tasks):
    for question in ("", "   \n", None):
        prompt = build_prompt(excavate_tasks, question)

        assert serialize_tasks(excavate_tasks) in prompt
        assert FULL_ANALYSIS_JSON_MARKER not in prompt
        for heading in ("High‑Level Health Check", "Detailed Activity Review",
                        "Priority Fix List", "Follow‑Up Questions"):
            assert heading in prompt
        assert "SPECIFIC QUESTION" not in prompt


def test_question_uses_specific_question_template(excavate_tasks):
    prompt = build_prompt(excavate_tasks, "  What is the critical path?  ")

    assert "SPECIFIC QUESTION: What is the critical path?\n" in prompt
    assert serialize_tasks(excavate_tasks) in prompt
    assert QUESTION_MARKER not in prompt
    assert QUESTION_JSON_MARKER not in prompt
    assert "Direct Answer to Specific Question" in prompt
    assert "Quick‑Hit Suggestions" in prompt
    assert "High‑Level Health Check" not in prompt


def test_embedded_json_round_trips_task_fields(excavate_tasks):
    prompt = build_prompt(excavate_tasks, "")
    [task] = json.loads(prompt.rsplit(RULE, 1)[1])

    assert task["id"] == 1
    assert task["name"] == "Excavate"
    assert task["duration"] == "PT64H0M0S"
    assert task["predecessors"] == []
    assert task["successors"] == [{"id": 2, "type": 1, "lag": "PT0H", "lagFormat": None}]
    assert Task.model_validate(task) == excavate_tasks[0]


def test_question_with_marker_text_does_not_capture_schedule(excavate_tasks):
    prompt = build_prompt(excavate_tasks, "Where does [PASTE_JSON_HERE] go?")

    assert "SPECIFIC QUESTION: Where does [PASTE_JSON_HERE] go?" in prompt
    tail = prompt.split("<<<  FULL SCHEDULE JSON BELOW  >>>\n", 1)[1]
    assert json.loads(tail)[0]["name"] == "Excavate"


def test_serialization_keeps_nested_relations(sample_xml):
    from schedule_sensei.ingestion import parse_project_xml

    tasks = parse_project_xml(sample_xml)
    decoded = json.loads(serialize_tasks(tasks))

    assert [Task.model_validate(d) for d in decoded] == tasks
    assert decoded[3]["predecessors"][0] == {"id": 2, "type": 2, "lag": "PT8H0M0S", "lagFormat": 7}
