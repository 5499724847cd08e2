from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RecordView:
    title: str = ""
    abstract: str = ""
    fields: list[tuple[str, str]] = field(default_factory=list)
    position: int = 0
    total: int = 0

    @property
    def counter(self) -> str:
        return f"Paper: {self.position} / {self.total}"

    @property
    def empty(self) -> bool:
        return self.total == 0


def _text(value) -> str:
    return "" if value is None else str(value)


def build_record_view(session, form=None, title_field="Title", abstract_field="Abstract") -> Optional[RecordView]:
    """Data for one screen of the current record, or None before any load.

    Editable values come from the form's pending buffers when a form is
    given, so unsaved edits stay visible across redraws.
    """
    if not session.is_loaded:
        return None

    record = session.current_record() or {}
    values = form.values if form is not None else {}
    fields = []
    for name in session.editable_fields:
        if name in values:
            fields.append((name, values[name]))
        else:
            fields.append((name, _text(record.get(name))))

    return RecordView(
        title=_text(record.get(title_field)),
        abstract=_text(record.get(abstract_field)),
        fields=fields,
        position=session.cursor,
        total=session.row_count,
    )
