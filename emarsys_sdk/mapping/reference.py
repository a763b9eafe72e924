"""
Emarsys Reference Data — Bundled Field and Choice Datasets.

Loads the two datasets that seed a MappingTable:

fields.json   (same shape as the `data` of GET /field)
    [{"id": 3, "name": "E-Mail", "application_type": "email", "string_id": "email"}]

choices.json  (assembled from GET /field/{id}/choice, keyed by field id)
    {"9": [{"id": "4", "choice": "Dr."}, {"id": "5", "choice": "Mag."}]}

Both default to the files shipped inside the package; callers can point
the loader at their own account's exports instead.
"""
from __future__ import annotations
from importlib import resources
from pathlib import Path
from typing import Callable
import json
import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)

FIELDS_RESOURCE = "fields.json"
CHOICES_RESOURCE = "choices.json"


class FieldRecord(BaseModel):
    """One entry of the fields dataset."""
    id: int
    name: str
    application_type: str
    string_id: str


class ChoiceRecord(BaseModel):
    """One choice of a single-/multi-choice field."""
    id: int  # shipped as a string, coerced on load
    choice: str


def _read_json(path: str | Path | None, resource: str):
    if path is None:
        data_dir = resources.files("emarsys_sdk.mapping").joinpath("data")
        text = data_dir.joinpath(resource).read_text(encoding="utf-8")
    else:
        text = Path(path).read_text(encoding="utf-8")
    return json.loads(text)


def load_field_records(path: str | Path | None = None) -> list[FieldRecord]:
    """Read and validate the fields dataset."""
    records = [FieldRecord.model_validate(item) for item in _read_json(path, FIELDS_RESOURCE)]
    logger.debug(f"Loaded {len(records)} field records from {path or 'bundled data'}")
    return records


def load_choice_records(path: str | Path | None = None) -> dict[int, list[ChoiceRecord]]:
    """Read and validate the choices dataset, keyed by numeric field id."""
    raw = _read_json(path, CHOICES_RESOURCE)
    return {
        int(field_id): [ChoiceRecord.model_validate(item) for item in choices]
        for field_id, choices in raw.items()
    }


def fields_to_mapping(records: list[FieldRecord]) -> dict[str, int]:
    """Cast field records into `string_id -> id`."""
    return {record.string_id: record.id for record in records}


def choices_to_mapping(
    records: dict[int, list[ChoiceRecord]],
    field_name_for: Callable[[int], str | int],
) -> dict[str, dict[str, int]]:
    """
    Cast choice records into `field string_id -> {label -> id}`.

    `field_name_for` turns a numeric field id into its symbolic name,
    echoing the id back when the field is not mapped.
    """
    mapping: dict[str, dict[str, int]] = {}
    for field_id, choices in records.items():
        field_name = str(field_name_for(field_id))
        inner = mapping.setdefault(field_name, {})
        for choice in choices:
            inner[choice.choice] = choice.id
    return mapping
