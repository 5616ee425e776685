import logging

from schedule_sensei.eventing import (
    CONSULTATION_COMPLETED,
    FILE_SELECTED,
    SCHEDULE_PARSED,
    Event,
    event_manager,
)
from schedule_sensei.ingestion import summarize_schedule

logger = logging.getLogger(__name__)


def file_selected_handler(event: Event):
    logger.info("Schedule file selected: %s", event.payload.get("file_name"))


def schedule_parsed_handler(event: Event):
    stats = summarize_schedule(event.payload.get("tasks") or [])
    logger.info(
        "[Progress] Schedule ready: %(task_count)d tasks (%(work_task_count)d work, "
        "%(summary_count)d summary), %(relation_count)d links, %(earliest_start)s -> %(latest_finish)s",
        stats,
    )


def consultation_completed_handler(event: Event):
    payload = event.payload
    if payload.get("error"):
        logger.info("Consultation failed: %s", payload["error"])
    else:
        logger.info("[Progress] Consultation complete (%d chars)", len(payload.get("response") or ""))


_HANDLERS = {
    FILE_SELECTED: file_selected_handler,
    SCHEDULE_PARSED: schedule_parsed_handler,
    CONSULTATION_COMPLETED: consultation_completed_handler,
}


def register_handlers(manager=event_manager):
    for event_type, handler in _HANDLERS.items():
        if handler not in manager.listeners.get(event_type, []):
            manager.add_listener(event_type, handler)


register_handlers()
