"""Interpreter quirk switches.

Historical CHIP-8 interpreters disagree on a handful of instructions.  The
defaults here follow the behaviour most modern programs expect;
:meth:`Quirks.cosmac_vip` reproduces the original RCA COSMAC VIP interpreter.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict


@dataclass(frozen=True, slots=True)
class Quirks:
    shift_uses_vy: bool = False
    logic_resets_vf: bool = False
    load_store_increments_i: bool = False
    clip_sprites: bool = False
    # FX1E overflow flag: only the Amiga interpreter set it.
    index_overflow_sets_vf: bool = False

    @classmethod
    def cosmac_vip(cls) -> "Quirks":
        return cls(
            shift_uses_vy=True,
            logic_resets_vf=True,
            load_store_increments_i=True,
            clip_sprites=True,
        )

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Quirks":
        unknown = set(data) - set(cls.names())
        if unknown:
            raise ValueError(f"Unknown quirk(s): {', '.join(sorted(unknown))}")
        return cls(**{name: bool(value) for name, value in data.items()})


__all__ = ["Quirks"]
