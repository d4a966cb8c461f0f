"""
Unit tests for the opcode namespace, component taxonomy and canonical groups

Run with: python -m pytest powermap/tests/test_specification.py
"""

import pytest

from powermap.classification import (
    CANONICAL_GROUPS,
    EntryGroup,
    Generation,
    MappingEntry,
    Opcode,
    PowerComponent,
)


def test_component_set_is_closed():
    assert [c.name for c in PowerComponent] == [
        'FP', 'FP_MUL', 'FP_SIN', 'DP', 'DP_MUL',
        'INT', 'INT_MUL', 'TENSOR', 'TEX', 'OTHER',
    ]


def test_every_component_has_description():
    for component in PowerComponent:
        assert component.description
    assert PowerComponent.TENSOR.description == "tensor core"


def test_component_values_are_not_falsy():
    """No category can be mistaken for an implicit empty default"""
    for component in PowerComponent:
        assert component.value


@pytest.mark.parametrize("text,expected", [
    ("FADD", Opcode.FADD),
    ("  fadd  ", Opcode.FADD),
    ("FADD.FTZ.RN", Opcode.FADD),
    ("HADD2_32I", Opcode.HADD2_32I),
    ("VOTE_VTG", Opcode.VOTE_VTG),
    ("LDG.E.128.SYS", Opcode.LDG),
])
def test_from_mnemonic(text, expected):
    assert Opcode.from_mnemonic(text) is expected


@pytest.mark.parametrize("text", ["", "UTMALDG", ".FTZ", "FADDX"])
def test_from_mnemonic_unknown(text):
    with pytest.raises(ValueError):
        Opcode.from_mnemonic(text)


def test_canonical_merge_order():
    assert [g.generation for g in CANONICAL_GROUPS] == [
        Generation.VOLTA,
        Generation.PASCAL,
        Generation.TURING,
        Generation.KEPLER,
        Generation.AMPERE,
    ]


def test_canonical_group_sizes():
    assert [len(g) for g in CANONICAL_GROUPS] == [128, 27, 36, 11, 9]


def test_canonical_groups_are_additive():
    """Each opcode is introduced by exactly one generation"""
    seen = {}
    for group in CANONICAL_GROUPS:
        for op in group.opcodes:
            assert op not in seen, f"{op.value} in {seen.get(op)} and {group.generation}"
            seen[op] = group.generation
    assert set(seen) == set(Opcode)


def test_canonical_entries_tagged_with_group_generation():
    for group in CANONICAL_GROUPS:
        assert group.reclassifications == ()
        for entry in group.entries:
            assert entry.generation is group.generation


def test_from_pairs_keeps_duplicates():
    group = EntryGroup.from_pairs(Generation.KEPLER, [
        (Opcode.ISUB, PowerComponent.INT),
        (Opcode.ISUB, PowerComponent.INT),
    ])
    assert group.entries == (
        MappingEntry(Opcode.ISUB, PowerComponent.INT, Generation.KEPLER),
        MappingEntry(Opcode.ISUB, PowerComponent.INT, Generation.KEPLER),
    )


def test_groups_are_frozen():
    group = CANONICAL_GROUPS[0]
    with pytest.raises(AttributeError):
        group.generation = Generation.AMPERE
    with pytest.raises(AttributeError):
        group.entries[0].component = PowerComponent.INT


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
