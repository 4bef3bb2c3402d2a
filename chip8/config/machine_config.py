"""Machine configuration for the CHIP-8 VM."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..constants import DEFAULT_CPU_HZ, MAX_CPU_HZ, MIN_CPU_HZ
from ..quirks import Quirks
from ..scheduler import TIMING_MODES, Scheduler
from ..vm import Chip8VM

ENV_PREFIX = "CHIP8_"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass
class MachineConfig:
    """CHIP-8 machine configuration."""

    name: str = "CHIP-8"
    cpu_hz: int = DEFAULT_CPU_HZ
    timing: str = "fixed"  # "fixed" or "vip"
    max_catchup_seconds: float = 0.25
    rng_seed: Optional[int] = None
    quirks: Quirks = field(default_factory=Quirks)

    def __post_init__(self) -> None:
        if not MIN_CPU_HZ <= int(self.cpu_hz) <= MAX_CPU_HZ:
            raise ValueError(
                f"cpu_hz must be between {MIN_CPU_HZ} and {MAX_CPU_HZ}, got {self.cpu_hz!r}"
            )
        self.cpu_hz = int(self.cpu_hz)
        if self.timing not in TIMING_MODES:
            raise ValueError(f"timing must be one of {TIMING_MODES}, got {self.timing!r}")
        if self.max_catchup_seconds <= 0:
            raise ValueError("max_catchup_seconds must be positive")

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "cpu_hz": self.cpu_hz,
            "timing": self.timing,
            "max_catchup_seconds": self.max_catchup_seconds,
            "rng_seed": self.rng_seed,
            "quirks": self.quirks.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MachineConfig":
        defaults = cls()
        return cls(
            name=data.get("name", defaults.name),
            cpu_hz=data.get("cpu_hz", defaults.cpu_hz),
            timing=data.get("timing", defaults.timing),
            max_catchup_seconds=data.get(
                "max_catchup_seconds", defaults.max_catchup_seconds
            ),
            rng_seed=data.get("rng_seed"),
            quirks=Quirks.from_dict(data.get("quirks", {})),
        )

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "MachineConfig":
        """Load configuration from JSON file."""

        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, base: Optional["MachineConfig"] = None) -> "MachineConfig":
        """Overlay ``CHIP8_*`` environment variables on ``base``."""

        base = base or cls()
        quirk_values = {
            name: _env_flag(f"{ENV_PREFIX}QUIRK_{name.upper()}", getattr(base.quirks, name))
            for name in Quirks.names()
        }
        return cls(
            name=base.name,
            cpu_hz=_env_int(f"{ENV_PREFIX}CPU_HZ", base.cpu_hz),
            timing=os.getenv(f"{ENV_PREFIX}TIMING", base.timing).strip().lower(),
            max_catchup_seconds=base.max_catchup_seconds,
            rng_seed=_env_int(f"{ENV_PREFIX}RNG_SEED", base.rng_seed),
            quirks=Quirks(**quirk_values),
        )

    @classmethod
    def for_model(cls, model: str) -> "MachineConfig":
        """Get configuration for a specific interpreter flavour."""

        configs = {
            "modern": cls(name="CHIP-8"),
            "cosmac-vip": cls(
                name="COSMAC VIP CHIP-8",
                timing="vip",
                quirks=Quirks.cosmac_vip(),
            ),
        }

        return configs.get(model, configs["modern"])


def create_machine(config: Optional[MachineConfig] = None) -> Tuple[Chip8VM, Scheduler]:
    """Build a VM and the scheduler that drives it."""

    config = config or MachineConfig()
    vm = Chip8VM(quirks=config.quirks, rng_seed=config.rng_seed)
    scheduler = Scheduler(
        vm,
        cpu_hz=config.cpu_hz,
        timing=config.timing,  # type: ignore[arg-type]
        max_catchup_seconds=config.max_catchup_seconds,
    )
    return vm, scheduler
