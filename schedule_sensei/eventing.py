# schedule_sensei/eventing.py

FILE_SELECTED = "file_selected"
SCHEDULE_PARSED = "schedule_parsed"
CONSULTATION_COMPLETED = "consultation_completed"


class Event:
    def __init__(self, event_type: str, payload: dict = None):
        self.event_type = event_type
        self.payload = payload or {}

    def __repr__(self):
        return f"Event({self.event_type!r}, {sorted(self.payload)})"


class EventManager:
    def __init__(self):
        self.listeners = {}

    def add_listener(self, event_type: str, listener):
        self.listeners.setdefault(event_type, []).append(listener)

    def remove_listener(self, event_type: str, listener):
        if listener in self.listeners.get(event_type, []):
            self.listeners[event_type].remove(listener)

    def emit(self, event: Event):
        for listener in list(self.listeners.get(event.event_type, [])):
            listener(event)


# Session transitions are published here; the UI and CLI share one instance.
event_manager = EventManager()
