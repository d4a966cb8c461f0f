"""
Generation-scoped power component specification.

The opcode namespace is shared by every generation, but each generation
contributes its own group of (opcode, component) entries. Groups are merged
in order by ClassificationTable.build(), which is where cross-generation
collisions are rejected. A later generation may only add opcodes; changing
the component of an opcode an earlier group already bound needs an explicit
Reclassification carrying the reason for the change.

Categories mirror the AccelWattch SASS power component mapping.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple

from .components import PowerComponent
from .opcodes import Opcode


class Generation(str, Enum):
    """Hardware generation that introduced an entry group."""

    VOLTA = "volta"      # Common base: instructions shared with the other cards
    PASCAL = "pascal"
    TURING = "turing"
    KEPLER = "kepler"
    AMPERE = "ampere"


@dataclass(frozen=True)
class MappingEntry:
    """One row of the specification."""

    opcode: Opcode
    component: PowerComponent
    generation: Generation


@dataclass(frozen=True)
class Reclassification:
    """Explicit change of a component bound by an earlier generation."""

    opcode: Opcode
    component: PowerComponent
    reason: str


@dataclass(frozen=True)
class EntryGroup:
    """Entries (and reclassifications) contributed by one generation."""

    generation: Generation
    entries: Tuple[MappingEntry, ...]
    reclassifications: Tuple[Reclassification, ...] = ()

    @classmethod
    def from_pairs(
        cls,
        generation: Generation,
        pairs: Iterable[Tuple[Opcode, PowerComponent]],
        reclassifications: Iterable[Reclassification] = (),
    ) -> "EntryGroup":
        """Build a group from (opcode, component) pairs, duplicates included."""
        entries = tuple(MappingEntry(op, comp, generation) for op, comp in pairs)
        return cls(generation, entries, tuple(reclassifications))

    @classmethod
    def of(
        cls,
        generation: Generation,
        mapping: Dict[Opcode, PowerComponent],
        reclassifications: Iterable[Reclassification] = (),
    ) -> "EntryGroup":
        """Build a group from an opcode -> component dict."""
        return cls.from_pairs(generation, mapping.items(), reclassifications)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def opcodes(self) -> Tuple[Opcode, ...]:
        return tuple(e.opcode for e in self.entries)


# ═══════════════════════════════════════════════════════════════════════
# VOLTA: common base, includes instructions shared with the other cards
# ═══════════════════════════════════════════════════════════════════════

VOLTA_GROUP = EntryGroup.from_pairs(
    Generation.VOLTA,
    [
        (Opcode.FADD, PowerComponent.FP),
        (Opcode.FADD32I, PowerComponent.FP),
        (Opcode.FCHK, PowerComponent.FP),
        (Opcode.FFMA32I, PowerComponent.FP_MUL),
        (Opcode.FFMA, PowerComponent.FP_MUL),
        (Opcode.FMNMX, PowerComponent.FP),
        (Opcode.FMUL, PowerComponent.FP_MUL),
        (Opcode.FMUL32I, PowerComponent.FP_MUL),
        (Opcode.FSEL, PowerComponent.FP),
        (Opcode.FSET, PowerComponent.FP),
        (Opcode.FSETP, PowerComponent.FP),
        (Opcode.FSWZADD, PowerComponent.FP),
        (Opcode.MUFU, PowerComponent.FP_SIN),
        (Opcode.HADD2, PowerComponent.FP),
        (Opcode.HADD2_32I, PowerComponent.FP),
        (Opcode.HFMA2, PowerComponent.FP_MUL),
        (Opcode.HFMA2_32I, PowerComponent.FP_MUL),
        (Opcode.HMUL2, PowerComponent.FP_MUL),
        (Opcode.HMUL2_32I, PowerComponent.FP_MUL),
        (Opcode.HSET2, PowerComponent.FP),
        (Opcode.HSETP2, PowerComponent.FP),
        (Opcode.HMMA, PowerComponent.TENSOR),
        (Opcode.DADD, PowerComponent.DP),
        (Opcode.DFMA, PowerComponent.DP_MUL),
        (Opcode.DMUL, PowerComponent.DP_MUL),
        (Opcode.DSETP, PowerComponent.DP),
        (Opcode.BMSK, PowerComponent.INT),
        (Opcode.BREV, PowerComponent.INT),
        (Opcode.FLO, PowerComponent.INT),
        (Opcode.IABS, PowerComponent.INT),
        (Opcode.IADD, PowerComponent.INT),
        (Opcode.IADD3, PowerComponent.INT),
        (Opcode.IADD32I, PowerComponent.INT),
        (Opcode.IDP, PowerComponent.INT_MUL),
        (Opcode.IDP4A, PowerComponent.INT_MUL),
        (Opcode.IMAD, PowerComponent.INT_MUL),
        (Opcode.IMMA, PowerComponent.TENSOR),
        (Opcode.IMNMX, PowerComponent.INT),
        (Opcode.IMUL, PowerComponent.INT_MUL),
        (Opcode.IMUL32I, PowerComponent.INT_MUL),
        (Opcode.ISCADD, PowerComponent.INT_MUL),
        (Opcode.ISCADD32I, PowerComponent.INT_MUL),
        (Opcode.ISETP, PowerComponent.INT),
        (Opcode.LEA, PowerComponent.INT_MUL),
        (Opcode.LOP, PowerComponent.INT),
        (Opcode.LOP3, PowerComponent.INT),
        (Opcode.LOP32I, PowerComponent.INT),
        (Opcode.POPC, PowerComponent.INT),
        (Opcode.SHF, PowerComponent.INT),
        (Opcode.SHR, PowerComponent.INT),
        (Opcode.VABSDIFF, PowerComponent.INT),
        (Opcode.VABSDIFF4, PowerComponent.INT),
        (Opcode.F2F, PowerComponent.FP),
        (Opcode.F2FP, PowerComponent.FP),
        (Opcode.F2I, PowerComponent.FP),
        (Opcode.I2F, PowerComponent.FP),
        (Opcode.I2I, PowerComponent.INT),
        (Opcode.I2IP, PowerComponent.INT),
        (Opcode.FRND, PowerComponent.INT),
        (Opcode.MOV, PowerComponent.INT),
        (Opcode.MOV32I, PowerComponent.INT),
        (Opcode.PRMT, PowerComponent.INT),
        (Opcode.SEL, PowerComponent.INT),
        (Opcode.SGXT, PowerComponent.INT),
        (Opcode.SHFL, PowerComponent.INT),
        (Opcode.PLOP3, PowerComponent.INT),
        (Opcode.PSETP, PowerComponent.INT),
        (Opcode.P2R, PowerComponent.INT),
        (Opcode.R2P, PowerComponent.INT),
        (Opcode.LD, PowerComponent.OTHER),
        (Opcode.LDC, PowerComponent.OTHER),
        (Opcode.LDG, PowerComponent.OTHER),
        (Opcode.LDL, PowerComponent.OTHER),
        (Opcode.LDS, PowerComponent.OTHER),
        (Opcode.ST, PowerComponent.OTHER),
        (Opcode.STG, PowerComponent.OTHER),
        (Opcode.STL, PowerComponent.OTHER),
        (Opcode.STS, PowerComponent.OTHER),
        (Opcode.MATCH, PowerComponent.OTHER),
        (Opcode.QSPC, PowerComponent.OTHER),
        (Opcode.ATOM, PowerComponent.OTHER),
        (Opcode.ATOMS, PowerComponent.OTHER),
        (Opcode.ATOMG, PowerComponent.OTHER),
        (Opcode.RED, PowerComponent.OTHER),
        (Opcode.CCTL, PowerComponent.OTHER),
        (Opcode.CCTLL, PowerComponent.OTHER),
        (Opcode.ERRBAR, PowerComponent.OTHER),
        (Opcode.MEMBAR, PowerComponent.OTHER),
        (Opcode.CCTLT, PowerComponent.OTHER),
        (Opcode.TEX, PowerComponent.TEX),
        (Opcode.TLD, PowerComponent.TEX),
        (Opcode.TLD4, PowerComponent.TEX),
        (Opcode.TMML, PowerComponent.TEX),
        (Opcode.TXD, PowerComponent.TEX),
        (Opcode.TXQ, PowerComponent.TEX),
        (Opcode.BMOV, PowerComponent.OTHER),
        (Opcode.BPT, PowerComponent.OTHER),
        (Opcode.BRA, PowerComponent.OTHER),
        (Opcode.BREAK, PowerComponent.OTHER),
        (Opcode.BRX, PowerComponent.OTHER),
        (Opcode.BSSY, PowerComponent.OTHER),
        (Opcode.BSYNC, PowerComponent.OTHER),
        (Opcode.CALL, PowerComponent.OTHER),
        (Opcode.EXIT, PowerComponent.OTHER),
        (Opcode.JMP, PowerComponent.OTHER),
        (Opcode.JMX, PowerComponent.OTHER),
        (Opcode.KILL, PowerComponent.OTHER),
        (Opcode.NANOSLEEP, PowerComponent.OTHER),
        (Opcode.RET, PowerComponent.OTHER),
        (Opcode.RPCMOV, PowerComponent.OTHER),
        (Opcode.RTT, PowerComponent.OTHER),
        (Opcode.WARPSYNC, PowerComponent.OTHER),
        (Opcode.YIELD, PowerComponent.OTHER),
        (Opcode.B2R, PowerComponent.OTHER),
        (Opcode.BAR, PowerComponent.OTHER),
        (Opcode.CS2R, PowerComponent.INT),
        (Opcode.CSMTEST, PowerComponent.OTHER),
        (Opcode.DEPBAR, PowerComponent.OTHER),
        (Opcode.GETLMEMBASE, PowerComponent.OTHER),
        (Opcode.LEPC, PowerComponent.OTHER),
        (Opcode.NOP, PowerComponent.OTHER),
        (Opcode.PMTRIG, PowerComponent.OTHER),
        (Opcode.R2B, PowerComponent.OTHER),
        (Opcode.S2R, PowerComponent.OTHER),
        (Opcode.SETCTAID, PowerComponent.OTHER),
        (Opcode.SETLMEMBASE, PowerComponent.OTHER),
        (Opcode.VOTE, PowerComponent.OTHER),
        (Opcode.VOTE_VTG, PowerComponent.OTHER),
    ],
)


# ═══════════════════════════════════════════════════════════════════════
# PASCAL: instructions unique to Pascal
# ═══════════════════════════════════════════════════════════════════════

PASCAL_GROUP = EntryGroup.from_pairs(
    Generation.PASCAL,
    [
        (Opcode.RRO, PowerComponent.FP),
        (Opcode.DMNMX, PowerComponent.DP),
        (Opcode.DSET, PowerComponent.DP),
        (Opcode.BFE, PowerComponent.INT),
        (Opcode.BFI, PowerComponent.INT),
        (Opcode.ICMP, PowerComponent.INT),
        (Opcode.IMADSP, PowerComponent.INT_MUL),
        (Opcode.SHL, PowerComponent.INT),
        (Opcode.XMAD, PowerComponent.INT_MUL),
        (Opcode.CSET, PowerComponent.INT),
        (Opcode.CSETP, PowerComponent.INT),
        (Opcode.TEXS, PowerComponent.TEX),
        (Opcode.TLD4S, PowerComponent.TEX),
        (Opcode.TLDS, PowerComponent.TEX),
        (Opcode.CAL, PowerComponent.OTHER),
        (Opcode.JCAL, PowerComponent.OTHER),
        (Opcode.PRET, PowerComponent.OTHER),
        (Opcode.BRK, PowerComponent.OTHER),
        (Opcode.PBK, PowerComponent.OTHER),
        (Opcode.CONT, PowerComponent.OTHER),
        (Opcode.PCNT, PowerComponent.OTHER),
        (Opcode.PEXIT, PowerComponent.OTHER),
        (Opcode.SSY, PowerComponent.OTHER),
        (Opcode.SYNC, PowerComponent.OTHER),
        (Opcode.PSET, PowerComponent.INT),
        (Opcode.VMNMX, PowerComponent.INT),
        (Opcode.ISET, PowerComponent.INT),
    ],
)


# ═══════════════════════════════════════════════════════════════════════
# TURING: instructions unique to Turing (uniform datapath, BMMA)
# ═══════════════════════════════════════════════════════════════════════

TURING_GROUP = EntryGroup.from_pairs(
    Generation.TURING,
    [
        (Opcode.BMMA, PowerComponent.TENSOR),
        (Opcode.MOVM, PowerComponent.INT),
        (Opcode.LDSM, PowerComponent.OTHER),
        (Opcode.R2UR, PowerComponent.INT),
        (Opcode.S2UR, PowerComponent.INT),
        (Opcode.UBMSK, PowerComponent.INT),
        (Opcode.UBREV, PowerComponent.INT),
        (Opcode.UCLEA, PowerComponent.INT_MUL),
        (Opcode.UFLO, PowerComponent.INT),
        (Opcode.UIADD3, PowerComponent.INT),
        (Opcode.UIMAD, PowerComponent.INT_MUL),
        (Opcode.UISETP, PowerComponent.INT),
        (Opcode.ULDC, PowerComponent.OTHER),
        (Opcode.ULEA, PowerComponent.INT),
        (Opcode.ULOP, PowerComponent.INT),
        (Opcode.ULOP3, PowerComponent.INT),
        (Opcode.ULOP32I, PowerComponent.INT),
        (Opcode.UMOV, PowerComponent.INT),
        (Opcode.UP2UR, PowerComponent.INT),
        (Opcode.UPLOP3, PowerComponent.INT),
        (Opcode.UPOPC, PowerComponent.INT),
        (Opcode.UPRMT, PowerComponent.INT),
        (Opcode.UPSETP, PowerComponent.INT),
        (Opcode.UR2UP, PowerComponent.INT),
        (Opcode.USEL, PowerComponent.INT),
        (Opcode.USGXT, PowerComponent.INT),
        (Opcode.USHF, PowerComponent.INT),
        (Opcode.USHL, PowerComponent.INT),
        (Opcode.USHR, PowerComponent.INT),
        (Opcode.VOTEU, PowerComponent.INT),
        (Opcode.SUATOM, PowerComponent.OTHER),
        (Opcode.SULD, PowerComponent.OTHER),
        (Opcode.SURED, PowerComponent.OTHER),
        (Opcode.SUST, PowerComponent.OTHER),
        (Opcode.BRXU, PowerComponent.OTHER),
        (Opcode.JMXU, PowerComponent.OTHER),
    ],
)


# ═══════════════════════════════════════════════════════════════════════
# KEPLER: instructions unique to Kepler
# ═══════════════════════════════════════════════════════════════════════

KEPLER_GROUP = EntryGroup.from_pairs(
    Generation.KEPLER,
    [
        (Opcode.FCMP, PowerComponent.FP),
        (Opcode.FSWZ, PowerComponent.FP),
        (Opcode.ISAD, PowerComponent.INT),
        (Opcode.LDSLK, PowerComponent.OTHER),
        (Opcode.STSCUL, PowerComponent.OTHER),
        (Opcode.SUCLAMP, PowerComponent.OTHER),
        (Opcode.SUBFM, PowerComponent.OTHER),
        (Opcode.SUEAU, PowerComponent.OTHER),
        (Opcode.SULDGA, PowerComponent.OTHER),
        (Opcode.SUSTGA, PowerComponent.OTHER),
        (Opcode.ISUB, PowerComponent.INT),
    ],
)


# ═══════════════════════════════════════════════════════════════════════
# AMPERE: instructions unique to Ampere (async copy, DMMA)
# ═══════════════════════════════════════════════════════════════════════

AMPERE_GROUP = EntryGroup.from_pairs(
    Generation.AMPERE,
    [
        (Opcode.HMNMX2, PowerComponent.FP),
        (Opcode.DMMA, PowerComponent.TENSOR),
        (Opcode.I2FP, PowerComponent.FP),
        (Opcode.F2IP, PowerComponent.FP),
        (Opcode.LDGDEPBAR, PowerComponent.OTHER),
        (Opcode.LDGSTS, PowerComponent.OTHER),
        (Opcode.REDUX, PowerComponent.INT),
        (Opcode.UF2FP, PowerComponent.FP),
        (Opcode.SUQUERY, PowerComponent.OTHER),
    ],
)


# Merge order used by ClassificationTable.build()
CANONICAL_GROUPS: Tuple[EntryGroup, ...] = (
    VOLTA_GROUP,
    PASCAL_GROUP,
    TURING_GROUP,
    KEPLER_GROUP,
    AMPERE_GROUP,
)
