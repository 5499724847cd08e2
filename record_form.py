class RecordForm:
    """Pending edit values for the displayed record, keyed by field name.

    The form is the single source of what the user currently sees. It is
    reseeded from the table whenever the table or cursor changes; when only
    the field selection changes, values of still-selected fields are kept and
    values of deselected fields are dropped.
    """

    def __init__(self, session):
        self.session = session
        self.values: dict[str, str] = {}
        self.focus = 0
        self.seeded_cursor: int | None = None
        self._seeded_fields: tuple[str, ...] = ()
        self._seeded_generation: int | None = None

    @staticmethod
    def _cell_text(value) -> str:
        return "" if value is None else str(value)

    def sync(self) -> bool:
        """Reseed if the session moved on since the last sync."""
        generation = self.session.generation
        cursor = self.session.cursor
        fields = self.session.editable_fields

        if generation != self._seeded_generation or cursor != self.seeded_cursor:
            self.reseed()
            return True
        if fields != self._seeded_fields:
            record = self.session.current_record() or {}
            kept = {f: self.values[f] for f in fields if f in self.values}
            for f in fields:
                if f not in kept:
                    kept[f] = self._cell_text(record.get(f))
            self.values = kept
            self._seeded_fields = fields
            self._clamp_focus()
            return True
        return False

    def reseed(self):
        record = self.session.current_record() or {}
        fields = self.session.editable_fields
        self.values = {f: self._cell_text(record.get(f)) for f in fields}
        self.seeded_cursor = self.session.cursor
        self._seeded_fields = fields
        self._seeded_generation = self.session.generation
        self._clamp_focus()

    def _clamp_focus(self):
        self.focus = max(0, min(self.focus, len(self.values) - 1))

    # ---------- access ----------
    @property
    def fields(self) -> list[str]:
        return list(self.values.keys())

    def focused_field(self) -> str | None:
        fields = self.fields
        if not fields:
            return None
        return fields[self.focus]

    def move_focus(self, delta: int):
        if not self.values:
            self.focus = 0
            return
        self.focus = max(0, min(len(self.values) - 1, self.focus + delta))

    def get_value(self, field: str) -> str:
        return self.values[field]

    def set_value(self, field: str, text: str):
        if field not in self.values:
            raise KeyError(field)
        self.values[field] = "" if text is None else str(text)

    def pending(self) -> dict[str, str]:
        return dict(self.values)

    def is_dirty(self) -> bool:
        record = self.session.current_record() or {}
        return any(
            self._cell_text(record.get(f)) != v for f, v in self.values.items()
        )
