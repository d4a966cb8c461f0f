"""
Power component taxonomy.

Every SASS opcode resolves to exactly one of these categories. Each category
stands for a distinct functional unit (or activity class) with its own energy
model downstream, so the set is closed: adding a member means adding a model.
"""

from enum import Enum


class PowerComponent(str, Enum):
    """Power-accounting category of an instruction."""

    FP = "fp"              # Single-precision float ALU (add, compare, convert)
    FP_MUL = "fp_mul"      # Single-precision multiply / FMA
    FP_SIN = "fp_sin"      # Special function unit (MUFU transcendentals)
    DP = "dp"              # Double-precision ALU
    DP_MUL = "dp_mul"      # Double-precision multiply / FMA
    INT = "int"            # Integer ALU, logic, shifts, moves
    INT_MUL = "int_mul"    # Integer multiply / multiply-add / scaled add
    TENSOR = "tensor"      # Tensor core matrix multiply-accumulate
    TEX = "tex"            # Texture unit
    OTHER = "other"        # Control flow, memory, barriers, everything else

    @property
    def description(self) -> str:
        """Datapath this category is charged to."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    PowerComponent.FP: "single-precision floating-point ALU",
    PowerComponent.FP_MUL: "single-precision floating-point multiplier",
    PowerComponent.FP_SIN: "special function unit (transcendentals)",
    PowerComponent.DP: "double-precision floating-point ALU",
    PowerComponent.DP_MUL: "double-precision floating-point multiplier",
    PowerComponent.INT: "integer ALU",
    PowerComponent.INT_MUL: "integer multiplier",
    PowerComponent.TENSOR: "tensor core",
    PowerComponent.TEX: "texture unit",
    PowerComponent.OTHER: "control, memory and synchronization (no compute datapath)",
}
