"""
Errors raised while building or querying a classification table.

Build-time errors (MalformedMapping, DuplicateEntry) must stop a simulation
from starting. UnclassifiedOpcode is only raised in strict mode; by default a
missing opcode is logged and resolved to OTHER.
"""


class PowerMapError(Exception):
    """Base class for classification errors."""


class MalformedMapping(PowerMapError):
    """An opcode is bound to more than one power component."""

    def __init__(self, opcode, components=(), generations=(), detail: str = ""):
        self.opcode = opcode
        self.components = tuple(components)
        self.generations = tuple(generations)
        if not detail:
            bound = ", ".join(
                f"{c.name} ({g.name})" for c, g in zip(self.components, self.generations)
            )
            detail = f"opcode {opcode.name} is bound to more than one component: {bound}"
        super().__init__(detail)


class DuplicateEntry(PowerMapError):
    """The same (opcode, component) pair is specified twice."""

    def __init__(self, opcode, component, generations=()):
        self.opcode = opcode
        self.component = component
        self.generations = tuple(generations)
        where = " and ".join(g.name for g in self.generations)
        super().__init__(
            f"duplicate entry {opcode.name} -> {component.name} (specified in {where})"
        )


class UnclassifiedOpcode(PowerMapError):
    """Lookup of an opcode that has no entry in the table."""

    def __init__(self, opcode):
        self.opcode = opcode
        name = getattr(opcode, 'value', opcode)
        super().__init__(f"opcode {name} has no power component mapping")


class NotInitialized(PowerMapError):
    """The table was queried before build() completed."""

    def __init__(self, message: str = "classification table has not been built"):
        super().__init__(message)


class AlreadyBuilt(PowerMapError):
    """build() was called on a table that is already built."""

    def __init__(self, message: str = "classification table is already built"):
        super().__init__(message)
