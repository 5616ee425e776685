# schedule_sensei/ingestion.py
import logging
import re
import xml.etree.ElementTree as ET
from collections import defaultdict
from typing import List, Optional, Union

import pandas as pd
from pydantic import ValidationError

from schedule_sensei.errors import ParseError
from schedule_sensei.models import MSP_LINK_TYPES, Relation, Task, TaskId
from schedule_sensei.utils import lag_to_iso, to_work_days

logger = logging.getLogger(__name__)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(parent, name: str):
    return [el for el in parent if _local(el.tag) == name]


def _child(parent, name: str):
    for el in parent:
        if _local(el.tag) == name:
            return el
    return None


def _text(parent, name: str) -> Optional[str]:
    el = _child(parent, name)
    if el is None or el.text is None:
        return None
    return el.text.strip()


_INT_ID = re.compile(r"-?[0-9]+")


def _coerce_id(value: str) -> TaskId:
    return int(value) if _INT_ID.fullmatch(value) else value


def _int_field(parent, name: str, default: Optional[int] = None) -> Optional[int]:
    value = _text(parent, name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"Expected an integer in <{name}>, got {value!r}")


def _predecessor(link) -> Relation:
    pred_uid = _text(link, "PredecessorUID")
    if not pred_uid:
        raise ParseError("PredecessorLink without a PredecessorUID")
    msp_type = _int_field(link, "Type", 1)
    if msp_type not in MSP_LINK_TYPES:
        raise ParseError(f"Unknown link type {msp_type} for predecessor {pred_uid}")
    return Relation(
        id=_coerce_id(pred_uid),
        type=MSP_LINK_TYPES[msp_type],
        lag=lag_to_iso(_int_field(link, "LinkLag", 0)),
        lag_format=_int_field(link, "LagFormat"),
    )


def parse_project_xml(xml_text: Union[str, bytes], include_summary: bool = True) -> List[Task]:
    """
    Turn an MS Project XML export into an ordered list of Task records.

    Successor lists are not stored in the file; they are rebuilt by
    inverting every PredecessorLink. Raises ParseError on anything that is
    not a readable project export, never returns a partial list.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise ParseError(f"Malformed XML: {exc}") from exc

    if _local(root.tag) != "Project":
        raise ParseError(f"Expected a <Project> root element, found <{_local(root.tag)}>")
    tasks_el = _child(root, "Tasks")
    if tasks_el is None:
        raise ParseError("No <Tasks> element found in project file")

    rows = []
    try:
        for task_el in _children(tasks_el, "Task"):
            if _text(task_el, "IsNull") == "1":
                continue
            uid = _text(task_el, "UID")
            if not uid:
                raise ParseError("Task without a <UID> element")
            rows.append({
                "id": _coerce_id(uid),
                "name": _text(task_el, "Name") or "",
                "duration": _text(task_el, "Duration"),
                "start": _text(task_el, "Start"),
                "finish": _text(task_el, "Finish"),
                "summary": _text(task_el, "Summary") == "1",
                "predecessors": [_predecessor(link) for link in _children(task_el, "PredecessorLink")],
            })

        successors = defaultdict(list)
        for row in rows:
            for pred in row["predecessors"]:
                successors[pred.id].append(
                    Relation(id=row["id"], type=pred.type, lag=pred.lag, lag_format=pred.lag_format)
                )

        tasks = [Task(successors=successors.get(row["id"], []), **row) for row in rows]
    except ValidationError as exc:
        raise ParseError(f"Unexpected task structure: {exc.errors()[0]['msg']}") from exc

    if not include_summary:
        tasks = [t for t in tasks if not t.summary]
    logger.info("[Progress] Parsed %d tasks from project XML", len(tasks))
    return tasks


def load_schedule(path: str, include_summary: bool = True) -> List[Task]:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise ParseError(f"Could not read {path}: {exc}") from exc
    return parse_project_xml(data, include_summary=include_summary)


def tasks_to_frame(tasks: List[Task]) -> pd.DataFrame:
    columns = ["id", "name", "duration", "work_days", "start", "finish",
               "summary", "predecessors", "successors"]
    records = [
        {
            "id": t.id,
            "name": t.name,
            "duration": t.duration,
            "work_days": to_work_days(t.duration),
            "start": t.start,
            "finish": t.finish,
            "summary": t.summary,
            "predecessors": len(t.predecessors),
            "successors": len(t.successors),
        }
        for t in tasks
    ]
    return pd.DataFrame(records, columns=columns)


def summarize_schedule(tasks: List[Task]) -> dict:
    starts = [t.start for t in tasks if t.start]
    finishes = [t.finish for t in tasks if t.finish]
    summary_count = sum(1 for t in tasks if t.summary)
    return {
        "task_count": len(tasks),
        "summary_count": summary_count,
        "work_task_count": len(tasks) - summary_count,
        "relation_count": sum(len(t.predecessors) for t in tasks),
        # ISO timestamps of one export share a format, so string order is date order
        "earliest_start": min(starts) if starts else None,
        "latest_finish": max(finishes) if finishes else None,
    }
