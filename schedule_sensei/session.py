# schedule_sensei/session.py
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from schedule_sensei.errors import (
    EmptyScheduleError,
    MissingCredentialError,
    ParseError,
    ScheduleSenseiError,
)
from schedule_sensei.eventing import (
    CONSULTATION_COMPLETED,
    FILE_SELECTED,
    SCHEDULE_PARSED,
    Event,
    EventManager,
    event_manager,
)
from schedule_sensei.ingestion import parse_project_xml
from schedule_sensei.llm_agent import consult, describe_error
from schedule_sensei.models import Task

logger = logging.getLogger(__name__)

PARSE_FAILED_MESSAGE = "Failed to parse XML. Please check the file format."


@dataclass
class ConsultantSession:
    """
    In-memory state of one user working through upload -> parse -> ask.

    Each public method is one user action. The API key lives only in this
    object and is left out of its repr.
    """
    file_name: Optional[str] = None
    upload_id: Optional[str] = None
    xml_text: Optional[Union[str, bytes]] = None
    tasks: Optional[List[Task]] = None
    parse_error: Optional[str] = None
    question: str = ""
    credential: str = field(default="", repr=False)
    include_summary: bool = True
    response: Optional[str] = None
    ai_error: Optional[str] = None
    parsing: bool = False
    ai_loading: bool = False
    events: EventManager = field(default=event_manager, repr=False, compare=False)
    consult_fn: Callable = field(default=consult, repr=False, compare=False)

    def select_file(self, file_name: str, content: Union[str, bytes]):
        self.file_name = file_name
        self.xml_text = content
        self.tasks = None
        self.parse_error = None
        self.response = None
        self.ai_error = None
        self.events.emit(Event(FILE_SELECTED, {"file_name": file_name}))

    def select_upload(self, upload_id: str, file_name: str, content: Union[str, bytes]) -> bool:
        # the same name and size can still be a different file; only the upload id tells
        if upload_id == self.upload_id:
            return False
        self.upload_id = upload_id
        self.select_file(file_name, content)
        return True

    def parse(self) -> Optional[List[Task]]:
        if self.xml_text is None:
            return None
        self.parsing = True
        self.parse_error = None
        self.tasks = None
        self.response = None
        try:
            self.tasks = parse_project_xml(self.xml_text, include_summary=self.include_summary)
        except ParseError as exc:
            logger.warning("Parse failed for %s: %s", self.file_name, exc)
            self.parse_error = PARSE_FAILED_MESSAGE
            return None
        finally:
            self.parsing = False
        self.events.emit(Event(SCHEDULE_PARSED, {"file_name": self.file_name, "tasks": self.tasks}))
        return self.tasks

    async def send_to_ai(self, **consult_kwargs) -> Optional[str]:
        # preconditions are reported without touching the loading flag
        if not self.tasks:
            self.ai_error = str(EmptyScheduleError())
            return None
        if not self.credential or not self.credential.strip():
            self.ai_error = str(MissingCredentialError())
            return None

        self.ai_loading = True
        self.ai_error = None
        self.response = None
        try:
            self.response = await self.consult_fn(
                self.tasks, self.question, self.credential, **consult_kwargs
            )
        except ScheduleSenseiError as exc:
            self.ai_error = describe_error(exc)
        except Exception as exc:
            logger.exception("Unexpected failure while consulting the model")
            self.ai_error = describe_error(exc)
        finally:
            self.ai_loading = False
        self.events.emit(Event(CONSULTATION_COMPLETED, {
            "response": self.response,
            "error": self.ai_error,
        }))
        return self.response

    def first_task_preview(self) -> Optional[str]:
        if not self.tasks:
            return None
        return json.dumps(self.tasks[0].to_json_dict(), indent=2, ensure_ascii=False)
