"""
SASS instruction classification for power accounting.

Provides:
- The power component taxonomy and the SASS opcode namespace
- Generation-scoped (opcode, component) entry groups
- The immutable classification table built from them
"""

from .components import PowerComponent
from .opcodes import Opcode
from .generations import (
    Generation,
    MappingEntry,
    Reclassification,
    EntryGroup,
    CANONICAL_GROUPS,
)
from .table import ClassificationTable, TableState, build_table

__all__ = [
    'PowerComponent',
    'Opcode',
    'Generation',
    'MappingEntry',
    'Reclassification',
    'EntryGroup',
    'CANONICAL_GROUPS',
    'ClassificationTable',
    'TableState',
    'build_table',
]
