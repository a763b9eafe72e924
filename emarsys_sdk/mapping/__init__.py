"""
Emarsys SDK Mapping — Field and Choice Name Resolution.

Provides:
- MappingTable: bidirectional field/choice lookups and body rewriting
- FieldRef: NumericFieldId | SymbolicFieldId normalized references
- Reference loaders for the bundled fields/choices datasets
"""
from emarsys_sdk.mapping.reference import (
    ChoiceRecord,
    FieldRecord,
    choices_to_mapping,
    fields_to_mapping,
    load_choice_records,
    load_field_records,
)
from emarsys_sdk.mapping.table import (
    FieldRef,
    MappingTable,
    NumericFieldId,
    SymbolicFieldId,
    field_ref,
)

__all__ = [
    # Table
    "FieldRef",
    "MappingTable",
    "NumericFieldId",
    "SymbolicFieldId",
    "field_ref",
    # Reference data
    "ChoiceRecord",
    "FieldRecord",
    "choices_to_mapping",
    "fields_to_mapping",
    "load_choice_records",
    "load_field_records",
]
