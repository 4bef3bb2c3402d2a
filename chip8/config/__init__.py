"""Configuration system for the CHIP-8 VM."""

from .machine_config import MachineConfig, create_machine

__all__ = ["MachineConfig", "create_machine"]
