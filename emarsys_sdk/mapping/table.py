"""
Emarsys Mapping Table — Field and Choice Name Resolution.

Translates caller-chosen symbolic names into the numeric ids the API
expects, and back:
- Fields: `string_id -> numeric id` (reverse lookup by scanning)
- Choices: `field string_id -> {choice label -> numeric id}`
- System fields (key_id, id, contacts, uid) bypass the table
- Contact bodies are rewritten key by key before being sent

Field references arriving from callers may be ints or strings; they are
normalized once into a FieldRef so lookups never rely on loose equality.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Union
import logging
import threading

from emarsys_sdk.constants import SYSTEM_FIELDS
from emarsys_sdk.errors import ClientError
from emarsys_sdk.mapping.reference import (
    choices_to_mapping,
    fields_to_mapping,
    load_choice_records,
    load_field_records,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field references
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumericFieldId:
    """A field addressed by its provider id, e.g. 3."""
    value: int


@dataclass(frozen=True)
class SymbolicFieldId:
    """A field addressed by its string_id, e.g. "email"."""
    value: str


FieldRef = Union[NumericFieldId, SymbolicFieldId]


def field_ref(raw: Any) -> FieldRef:
    """Normalize an int, digit-only string or FieldRef into a FieldRef."""
    if isinstance(raw, (NumericFieldId, SymbolicFieldId)):
        return raw
    if isinstance(raw, bool):
        raise TypeError(f"Invalid field reference: {raw!r}")
    if isinstance(raw, int):
        return NumericFieldId(raw)
    if isinstance(raw, str):
        if _is_numeric(raw):
            return NumericFieldId(int(raw))
        return SymbolicFieldId(raw)
    raise TypeError(f"Invalid field reference: {raw!r}")


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        digits = value[1:] if value.startswith("-") else value
        return digits.isdigit()
    return False


def _coerce_id(value: Any) -> Any:
    """Ids are shipped as ints or numeric strings; store them as ints."""
    return int(value) if _is_numeric(value) else value


# ---------------------------------------------------------------------------
# MappingTable
# ---------------------------------------------------------------------------

class MappingTable:
    """Bidirectional field/choice mapping owned by a single client."""

    def __init__(
        self,
        fields: Mapping[str, Any] | None = None,
        choices: Mapping[str, Mapping[str, Any]] | None = None,
    ):
        self._lock = threading.RLock()
        self._fields: dict[str, Any] = {}
        self._choices: dict[str, dict[str, Any]] = {}
        if fields:
            self.add_fields_mapping(fields)
        if choices:
            self.add_choices_mapping(choices)

    @classmethod
    def from_reference(
        cls,
        fields_path: str | Path | None = None,
        choices_path: str | Path | None = None,
    ) -> MappingTable:
        """Seed a table from the fields/choices datasets (bundled by default)."""
        table = cls(fields=fields_to_mapping(load_field_records(fields_path)))
        choices = choices_to_mapping(
            load_choice_records(choices_path),
            table.resolve_field_name,
        )
        table.add_choices_mapping(choices)
        return table

    # --- Snapshots ---

    @property
    def fields(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._fields)

    @property
    def choices(self) -> dict[str, dict[str, Any]]:
        with self._lock:
            return {name: dict(inner) for name, inner in self._choices.items()}

    # --- Mutation ---

    def add_fields_mapping(self, mapping: Mapping[str, Any]) -> None:
        """Merge field mappings; a later entry overwrites the same name."""
        with self._lock:
            for name, field_id in mapping.items():
                self._fields[name] = _coerce_id(field_id)
        logger.debug(f"Merged {len(mapping)} field mappings")

    def add_choices_mapping(self, mapping: Mapping[str, Any]) -> None:
        """
        Merge choice mappings per field.

        Labels added for an already known field are merged into its
        existing choices. Values that are not mappings are ignored.
        """
        with self._lock:
            for field_name, choices in mapping.items():
                if not isinstance(choices, Mapping):
                    logger.debug(f"Ignoring non-mapping choices for field {field_name!r}")
                    continue
                inner = self._choices.setdefault(str(field_name), {})
                for label, choice_id in choices.items():
                    inner[label] = _coerce_id(choice_id)

    # --- Fields ---

    def resolve_field_id(self, name: str) -> int | str:
        """Return the numeric id of a field name; system fields pass through."""
        if name in SYSTEM_FIELDS:
            return name
        with self._lock:
            if name not in self._fields:
                raise ClientError.unrecognized_field_name(name)
            return self._fields[name]

    def resolve_field_name(self, field_id: Any) -> str | Any:
        """Return the name mapped to a field id, or the id itself."""
        wanted = _coerce_id(field_id)
        with self._lock:
            for name, mapped_id in self._fields.items():
                if mapped_id == wanted:
                    return name
        return field_id

    def _choice_key(self, ref: FieldRef) -> str:
        if isinstance(ref, NumericFieldId):
            return str(self.resolve_field_name(ref.value))
        return ref.value

    # --- Choices ---

    def resolve_choice_id(self, field: Any, choice: str) -> int:
        """Return the numeric id of a choice label within a field."""
        key = self._choice_key(field_ref(field))
        with self._lock:
            if key not in self._choices:
                raise ClientError.unrecognized_field_for_choice(field, choice)
            if choice not in self._choices[key]:
                raise ClientError.unrecognized_choice_for_field(choice, field)
            return self._choices[key][choice]

    def resolve_choice_name(self, field: Any, choice_id: Any) -> str | Any:
        """Return the label of a choice id, or the id itself when unmapped."""
        key = self._choice_key(field_ref(field))
        wanted = _coerce_id(choice_id)
        with self._lock:
            if key not in self._choices:
                raise ClientError.unrecognized_field_for_choice(field, choice_id)
            for label, mapped_id in self._choices[key].items():
                if mapped_id == wanted:
                    return label
        return choice_id

    # --- Bodies ---

    def map_fields_to_ids(self, data: Mapping[str, Any]) -> dict[Any, Any]:
        """Rewrite record keys: numeric keys become ints, names become ids."""
        mapped: dict[Any, Any] = {}
        for key, value in data.items():
            if _is_numeric(key):
                mapped[int(key)] = value
            else:
                mapped[self.resolve_field_id(key)] = value
        return mapped

    def resolve_contact_body(self, data: Mapping[str, Any]) -> dict[Any, Any]:
        """Resolve each record of a `contacts` batch, then the body itself."""
        body = dict(data)
        contacts = body.get("contacts")
        if isinstance(contacts, list):
            body["contacts"] = [self.map_fields_to_ids(record) for record in contacts]
        return self.map_fields_to_ids(body)
