import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from schedule_sensei.config import get_settings
from schedule_sensei.errors import (
    EmptyScheduleError,
    MissingCredentialError,
    ParseError,
    TransportError,
    UpstreamError,
)
from schedule_sensei.ingestion import parse_project_xml, summarize_schedule
from schedule_sensei.llm_agent import consult
from schedule_sensei.logging_setup import configure_logging
from schedule_sensei.models import Task
from schedule_sensei.prompts import build_prompt

logger = logging.getLogger(__name__)

configure_logging(get_settings().log_level)

app = FastAPI(title="ScheduleSensei")


class ParseScheduleRequest(BaseModel):
    xml: str
    include_summary: bool = True


class BuildPromptRequest(BaseModel):
    tasks: List[Task]
    question: Optional[str] = ""


class ConsultRequest(BaseModel):
    tasks: List[Task]
    question: Optional[str] = ""
    api_key: str = ""


@app.post("/parse-schedule/")
def parse_schedule(request: ParseScheduleRequest):
    try:
        tasks = parse_project_xml(request.xml, include_summary=request.include_summary)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=f"Failed to parse XML: {e}")
    return {
        "task_count": len(tasks),
        "summary": summarize_schedule(tasks),
        "tasks": [t.to_json_dict() for t in tasks],
    }


@app.post("/build-prompt/")
def build_prompt_endpoint(request: BuildPromptRequest):
    if not request.tasks:
        raise HTTPException(status_code=400, detail=str(EmptyScheduleError()))
    return {"prompt": build_prompt(request.tasks, request.question)}


@app.post("/consult/")
async def consult_endpoint(request: ConsultRequest):
    # the key is used for this one call and never stored
    try:
        reply = await consult(request.tasks, request.question, request.api_key, settings=get_settings())
    except (EmptyScheduleError, MissingCredentialError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except TransportError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"response": reply}
