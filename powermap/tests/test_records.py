"""
Unit tests for specification rows

Run with: python -m pytest powermap/tests/test_records.py
"""

import pytest
from pydantic import ValidationError

from powermap.classification import (
    ClassificationTable,
    Generation,
    Opcode,
    PowerComponent,
    build_table,
)
from powermap.errors import DuplicateEntry, MalformedMapping
from powermap.records import (
    DEFAULT_GENERATION,
    EntryRecord,
    groups_from_records,
    records_from_table,
)


def test_record_normalizes_text():
    record = EntryRecord.model_validate(
        {"opcode": " ffma ", "component": "FP_MUL", "generation": "Volta"}
    )
    assert record.opcode is Opcode.FFMA
    assert record.component is PowerComponent.FP_MUL
    assert record.generation is Generation.VOLTA


def test_record_without_generation():
    record = EntryRecord(opcode="HMMA", component="tensor")
    assert record.generation is None
    assert record.to_entry().generation is DEFAULT_GENERATION


@pytest.mark.parametrize("row", [
    {"opcode": "NOTANOP", "component": "fp"},
    {"opcode": "FADD", "component": "vector"},
    {"opcode": "FADD", "component": "fp", "generation": "hopper"},
    {"component": "fp"},
])
def test_invalid_rows(row):
    with pytest.raises(ValidationError):
        EntryRecord.model_validate(row)


def test_groups_in_first_seen_order():
    rows = [
        {"opcode": "BMMA", "component": "tensor", "generation": "turing"},
        {"opcode": "FADD", "component": "fp"},
        {"opcode": "UIMAD", "component": "int_mul", "generation": "turing"},
    ]
    groups = groups_from_records(rows)

    assert [g.generation for g in groups] == [Generation.TURING, Generation.VOLTA]
    assert groups[0].opcodes == (Opcode.BMMA, Opcode.UIMAD)
    assert groups[1].opcodes == (Opcode.FADD,)


def test_rows_build_a_table():
    rows = [
        {"opcode": "FADD", "component": "fp", "generation": "volta"},
        EntryRecord(opcode="DMMA", component="tensor", generation="ampere"),
    ]
    table = build_table(groups_from_records(rows))

    assert len(table) == 2
    assert table.classify("DMMA") is PowerComponent.TENSOR


def test_duplicate_rows_are_kept_for_build():
    rows = [
        {"opcode": "LDG", "component": "other"},
        {"opcode": "LDG", "component": "other"},
    ]
    with pytest.raises(DuplicateEntry):
        ClassificationTable(groups_from_records(rows)).build()


def test_conflicting_rows_rejected():
    rows = [
        {"opcode": "FADD", "component": "fp", "generation": "volta"},
        {"opcode": "FADD", "component": "int", "generation": "ampere"},
    ]
    with pytest.raises(MalformedMapping):
        ClassificationTable(groups_from_records(rows)).build()


def test_canonical_table_round_trip():
    """Rows dumped from the canonical table rebuild the same mapping"""
    table = build_table()
    records = records_from_table(table)

    assert len(records) == len(table)
    rebuilt = build_table(groups_from_records(r.model_dump(mode='json') for r in records))
    assert dict(rebuilt.mapping) == dict(table.mapping)
    assert rebuilt.generation_of(Opcode.XMAD) is Generation.PASCAL


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
