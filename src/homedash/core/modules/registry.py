"""Collections served by the generic CRUD layer."""

from homedash.core.modules.event.models import Event
from homedash.core.modules.event.normalizers import normalize_event_create, normalize_event_update, prepare_event_list
from homedash.core.modules.link.models import Link
from homedash.core.modules.link.normalizers import normalize_link_create, normalize_link_update
from homedash.core.modules.note.models import Note
from homedash.core.modules.note.normalizers import normalize_note_create, normalize_note_update
from homedash.core.modules.record.models import CollectionDefinition
from homedash.core.modules.todo.models import Todo
from homedash.core.modules.todo.normalizers import normalize_todo_create, normalize_todo_update

LINKS = CollectionDefinition(
    name="links",
    model=Link,
    normalize_create=normalize_link_create,
    normalize_update=normalize_link_update,
)

TODOS = CollectionDefinition(
    name="todos",
    model=Todo,
    normalize_create=normalize_todo_create,
    normalize_update=normalize_todo_update,
)

NOTES = CollectionDefinition(
    name="notes",
    model=Note,
    normalize_create=normalize_note_create,
    normalize_update=normalize_note_update,
)

EVENTS = CollectionDefinition(
    name="events",
    model=Event,
    normalize_create=normalize_event_create,
    normalize_update=normalize_event_update,
    prepare_list=prepare_event_list,
)

COLLECTIONS: tuple[CollectionDefinition, ...] = (LINKS, TODOS, NOTES, EVENTS)
