from homedash.core.modules.record.models import Record


class Todo(Record):
    text: str
    done: bool = False
