"""Target project assemblers and their registry."""

from .lib import (
    Assembly,
    AssemblyInput,
    TargetAssembler,
    UnitSource,
    get_assembler,
    json_document,
    list_assemblers,
    register_assembler,
    unique,
)

__all__ = [
    # Assembly
    "UnitSource",
    "AssemblyInput",
    "Assembly",
    "TargetAssembler",
    # Registry
    "register_assembler",
    "get_assembler",
    "list_assemblers",
    # Helpers
    "unique",
    "json_document",
]
