# schedule_sensei/models.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Union

# relation codes used in the prompt JSON (1 FS, 2 SS, 3 FF, 4 SF)
FINISH_TO_START = 1
START_TO_START = 2
FINISH_TO_FINISH = 3
START_TO_FINISH = 4

RELATION_CODES = {
    FINISH_TO_START: "FS",
    START_TO_START: "SS",
    FINISH_TO_FINISH: "FF",
    START_TO_FINISH: "SF",
}

# PredecessorLink/Type as written by MS Project (0 FF, 1 FS, 2 SF, 3 SS)
MSP_LINK_TYPES = {
    0: FINISH_TO_FINISH,
    1: FINISH_TO_START,
    2: START_TO_FINISH,
    3: START_TO_START,
}

TaskId = Union[int, str]


class Relation(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: TaskId
    type: int = Field(default=FINISH_TO_START, ge=FINISH_TO_START, le=START_TO_FINISH)
    lag: str = "PT0H0M0S"
    lag_format: Optional[int] = Field(default=None, alias="lagFormat")

    @property
    def code(self) -> str:
        return RELATION_CODES[self.type]


class Task(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: TaskId
    name: str = ""
    duration: Optional[str] = None
    start: Optional[str] = None
    finish: Optional[str] = None
    summary: bool = False
    predecessors: List[Relation] = Field(default_factory=list)
    successors: List[Relation] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
