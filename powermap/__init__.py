"""
powermap - SASS opcode to power component classification for GPU power models.
"""

from .classification import (
    PowerComponent,
    Opcode,
    Generation,
    MappingEntry,
    Reclassification,
    EntryGroup,
    CANONICAL_GROUPS,
    ClassificationTable,
    TableState,
    build_table,
)
from .errors import (
    PowerMapError,
    MalformedMapping,
    DuplicateEntry,
    UnclassifiedOpcode,
    NotInitialized,
    AlreadyBuilt,
)

__version__ = '0.1.0'

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
    'PowerMapError',
    'MalformedMapping',
    'DuplicateEntry',
    'UnclassifiedOpcode',
    'NotInitialized',
    'AlreadyBuilt',
]
