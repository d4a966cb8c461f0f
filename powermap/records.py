"""
Specification rows.

The only data format at the classifier's boundary is a list of rows
{opcode, component, generation}. EntryRecord validates one row;
groups_from_records turns rows into the EntryGroups the table is built from.
Duplicate rows are kept so that build() reports them.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from powermap.classification.components import PowerComponent
from powermap.classification.generations import EntryGroup, Generation, MappingEntry
from powermap.classification.table import ClassificationTable
from powermap.classification.opcodes import Opcode

# Rows without a generation tag belong to the common base
DEFAULT_GENERATION = Generation.VOLTA


class EntryRecord(BaseModel):
    opcode: Opcode = Field(..., description="SASS mnemonic, without modifiers")
    component: PowerComponent = Field(..., description="Power component, e.g. 'fp_mul' or 'FP_MUL'")
    generation: Optional[Generation] = Field(default=None, description="Generation tag (documentation and grouping)")

    @field_validator('opcode', mode='before')
    @classmethod
    def _normalize_opcode(cls, value):
        if isinstance(value, str) and not isinstance(value, Opcode):
            return value.strip().upper()
        return value

    @field_validator('component', 'generation', mode='before')
    @classmethod
    def _normalize_enum_text(cls, value):
        if isinstance(value, str) and not isinstance(value, (PowerComponent, Generation)):
            return value.strip().lower()
        return value

    def to_entry(self) -> MappingEntry:
        return MappingEntry(self.opcode, self.component, self.generation or DEFAULT_GENERATION)


def groups_from_records(rows: Iterable[Union[EntryRecord, Dict]]) -> Tuple[EntryGroup, ...]:
    """
    Group rows by generation, in the order each generation first appears.

    Raises pydantic.ValidationError for a row that does not validate.
    """
    by_generation: Dict[Generation, List[MappingEntry]] = {}
    for row in rows:
        record = row if isinstance(row, EntryRecord) else EntryRecord.model_validate(row)
        entry = record.to_entry()
        by_generation.setdefault(entry.generation, []).append(entry)

    return tuple(
        EntryGroup(generation, tuple(entries))
        for generation, entries in by_generation.items()
    )


def records_from_table(table: ClassificationTable) -> List[EntryRecord]:
    """Rows of a built table, tagged with the generation that introduced each opcode."""
    return [
        EntryRecord(opcode=e.opcode, component=e.component, generation=e.generation)
        for e in table.entries()
    ]
