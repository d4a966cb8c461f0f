"""
Opcode -> power component classification table.

A table starts Unbuilt, holding the generation groups it was given. build()
merges the groups in order, rejects any collision, and freezes the result;
from then on the table is Built for the rest of its life and only answers
lookups. Lookups never mutate the mapping, so a built table can be shared by
any number of simulator threads without locking.

Lookup of an opcode the table does not know is not fatal: it is reported as a
warning (once per distinct opcode unless report_every is set) and charged to
PowerComponent.OTHER so a long simulation keeps producing a power estimate.

Example:
    table = ClassificationTable().build()
    table.classify(Opcode.FFMA)       # PowerComponent.FP_MUL
    table.classify("HMMA.16816.F32")  # PowerComponent.TENSOR
"""

import logging
from enum import Enum
from threading import Lock
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from powermap.config import REPORT_EVERY, STRICT
from powermap.errors import (
    AlreadyBuilt,
    DuplicateEntry,
    MalformedMapping,
    NotInitialized,
    UnclassifiedOpcode,
)

from .components import PowerComponent
from .generations import (
    CANONICAL_GROUPS,
    EntryGroup,
    Generation,
    MappingEntry,
    Reclassification,
)
from .opcodes import Opcode

logger = logging.getLogger(__name__)

OpcodeLike = Union[Opcode, str]


class TableState(Enum):
    UNBUILT = "unbuilt"
    BUILT = "built"


class ClassificationTable:
    """
    Immutable opcode -> PowerComponent mapping built from generation groups.

    Several tables can coexist; nothing here is process-global.
    """

    def __init__(
        self,
        groups: Iterable[EntryGroup] = CANONICAL_GROUPS,
        *,
        report_every: Optional[bool] = None,
        strict: Optional[bool] = None,
    ):
        """
        Args:
            groups: Entry groups, merged in the given order by build()
            report_every: Log a missing opcode on every lookup instead of once
                (default: POWERMAP_REPORT_EVERY)
            strict: Raise UnclassifiedOpcode instead of returning OTHER
                (default: POWERMAP_STRICT)
        """
        self._groups: Tuple[EntryGroup, ...] = tuple(groups)
        self.report_every = REPORT_EVERY if report_every is None else report_every
        self.strict = STRICT if strict is None else strict

        self._mapping: Optional[Mapping[Opcode, PowerComponent]] = None
        self._origin: Mapping[Opcode, Generation] = MappingProxyType({})
        self._reclassified: Mapping[Opcode, Tuple[Generation, Reclassification]] = MappingProxyType({})

        # Missing opcodes already reported; never affects lookup results
        self._reported: set = set()
        self._report_lock = Lock()

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self) -> "ClassificationTable":
        """
        Merge the entry groups and freeze the table.

        Raises:
            DuplicateEntry: the same (opcode, component) pair appears twice
            MalformedMapping: an opcode is bound to two components, or a
                reclassification is not a documented change of an earlier entry
            AlreadyBuilt: the table was built before

        On failure the table stays Unbuilt.
        """
        if self._mapping is not None:
            raise AlreadyBuilt()

        mapping: Dict[Opcode, PowerComponent] = {}
        origin: Dict[Opcode, Generation] = {}
        reclassified: Dict[Opcode, Tuple[Generation, Reclassification]] = {}
        # Generation responsible for the binding currently in effect
        bound_by: Dict[Opcode, Generation] = {}

        for group in self._groups:
            defined_before = set(mapping)

            for entry in group.entries:
                bound = mapping.get(entry.opcode)
                if bound is None:
                    mapping[entry.opcode] = entry.component
                    origin[entry.opcode] = entry.generation
                    bound_by[entry.opcode] = entry.generation
                elif bound is entry.component:
                    raise DuplicateEntry(
                        entry.opcode,
                        entry.component,
                        (bound_by[entry.opcode], entry.generation),
                    )
                else:
                    raise MalformedMapping(
                        entry.opcode,
                        (bound, entry.component),
                        (bound_by[entry.opcode], entry.generation),
                    )

            changed_here = set()
            for change in group.reclassifications:
                self._check_reclassification(
                    group.generation, change, mapping, origin, defined_before, changed_here
                )
                logger.info(
                    f"Reclassified {change.opcode.value}: {mapping[change.opcode].name} -> "
                    f"{change.component.name} ({group.generation.name}: {change.reason})"
                )
                mapping[change.opcode] = change.component
                reclassified[change.opcode] = (group.generation, change)
                bound_by[change.opcode] = group.generation
                changed_here.add(change.opcode)

        self._origin = MappingProxyType(origin)
        self._reclassified = MappingProxyType(reclassified)
        self._mapping = MappingProxyType(mapping)

        logger.debug(
            f"Classification table built: {len(mapping)} opcodes from "
            f"{len(self._groups)} generation groups, {len(reclassified)} reclassified"
        )
        return self

    @staticmethod
    def _check_reclassification(
        generation: Generation,
        change: Reclassification,
        mapping: Dict[Opcode, PowerComponent],
        origin: Dict[Opcode, Generation],
        defined_before: set,
        changed_here: set,
    ) -> None:
        """A reclassification must change an earlier generation's binding and say why."""
        op = change.opcode
        if not change.reason.strip():
            raise MalformedMapping(
                op, detail=f"reclassification of {op.value} in {generation.name} has no reason"
            )
        if op not in defined_before:
            raise MalformedMapping(
                op,
                detail=(
                    f"reclassification of {op.value} in {generation.name} does not "
                    f"target an opcode defined by an earlier generation"
                ),
            )
        if op in changed_here:
            raise MalformedMapping(
                op, detail=f"{op.value} is reclassified twice in {generation.name}"
            )
        if mapping[op] is change.component:
            raise MalformedMapping(
                op,
                detail=(
                    f"reclassification of {op.value} in {generation.name} keeps "
                    f"{change.component.name} (already bound by {origin[op].name})"
                ),
            )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def classify(self, opcode: OpcodeLike) -> PowerComponent:
        """
        Return the power component of an opcode.

        Accepts an Opcode or decoder text ("FFMA", "IMAD.WIDE.U32"). Unknown
        opcodes resolve to OTHER after a warning; in strict mode they raise
        UnclassifiedOpcode instead.

        Raises:
            NotInitialized: build() has not completed
        """
        mapping = self._require_built()

        component = mapping.get(opcode)
        if component is not None:
            return component

        if isinstance(opcode, str) and not isinstance(opcode, Opcode):
            try:
                component = mapping.get(Opcode.from_mnemonic(opcode))
            except ValueError:
                component = None
            if component is not None:
                return component

        return self._unclassified(opcode)

    @staticmethod
    def _missing_name(opcode) -> str:
        """Report key of a missing opcode: the base mnemonic, modifiers and case dropped."""
        if isinstance(opcode, Opcode):
            return opcode.value
        text = str(opcode).strip()
        if isinstance(opcode, str):
            return text.upper().split('.', 1)[0] or text
        return text

    def _unclassified(self, opcode) -> PowerComponent:
        name = self._missing_name(opcode)

        with self._report_lock:
            first_seen = name not in self._reported
            self._reported.add(name)

        if self.strict:
            raise UnclassifiedOpcode(name)

        if first_seen or self.report_every:
            logger.warning(
                f"Unclassified opcode {name}: no power component mapping, "
                f"charging to {PowerComponent.OTHER.name}"
            )
        return PowerComponent.OTHER

    def _require_built(self) -> Mapping[Opcode, PowerComponent]:
        mapping = self._mapping
        if mapping is None:
            raise NotInitialized()
        return mapping

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> TableState:
        return TableState.UNBUILT if self._mapping is None else TableState.BUILT

    @property
    def is_built(self) -> bool:
        return self._mapping is not None

    @property
    def groups(self) -> Tuple[EntryGroup, ...]:
        return self._groups

    @property
    def mapping(self) -> Mapping[Opcode, PowerComponent]:
        """Read-only view of the merged mapping."""
        return self._require_built()

    @property
    def unclassified(self) -> frozenset:
        """Missing opcodes looked up so far."""
        with self._report_lock:
            return frozenset(self._reported)

    @property
    def reclassifications(self) -> Mapping[Opcode, Tuple[Generation, Reclassification]]:
        """Opcodes whose component was changed by a later generation."""
        self._require_built()
        return self._reclassified

    def __contains__(self, opcode) -> bool:
        mapping = self._require_built()
        if opcode in mapping:
            return True
        if isinstance(opcode, str) and not isinstance(opcode, Opcode):
            try:
                return Opcode.from_mnemonic(opcode) in mapping
            except ValueError:
                return False
        return False

    def __len__(self) -> int:
        return len(self._require_built())

    def __iter__(self) -> Iterator[Opcode]:
        return iter(self._require_built())

    def items(self):
        return self._require_built().items()

    def generation_of(self, opcode: Opcode) -> Optional[Generation]:
        """Generation that introduced an opcode, or None if it is not mapped."""
        self._require_built()
        return self._origin.get(opcode)

    def opcodes_for(self, component: PowerComponent) -> Tuple[Opcode, ...]:
        """All opcodes charged to a component, in merge order."""
        return tuple(op for op, comp in self._require_built().items() if comp is component)

    def entries(self) -> Tuple[MappingEntry, ...]:
        """Merged mapping as specification rows, tagged with the introducing generation."""
        mapping = self._require_built()
        return tuple(
            MappingEntry(op, comp, self._origin[op]) for op, comp in mapping.items()
        )

    def summary(self) -> Dict[PowerComponent, int]:
        """Number of opcodes per component (every component listed)."""
        counts = {component: 0 for component in PowerComponent}
        for component in self._require_built().values():
            counts[component] += 1
        return counts

    def __repr__(self) -> str:
        if self._mapping is None:
            return f"<ClassificationTable unbuilt, {len(self._groups)} groups>"
        return f"<ClassificationTable built, {len(self._mapping)} opcodes>"


def build_table(groups: Iterable[EntryGroup] = CANONICAL_GROUPS, **kwargs) -> ClassificationTable:
    """Construct and build a table in one step."""
    return ClassificationTable(groups, **kwargs).build()
