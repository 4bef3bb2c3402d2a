"""Debug utilities for the CHIP-8 VM."""

from .disassembler import DisassembledLine, disassemble, format_listing
from .renderer import DisplayRenderer

__all__ = ["DisassembledLine", "DisplayRenderer", "disassemble", "format_listing"]
