from __future__ import annotations

import pytest

from chip8.config import MachineConfig, create_machine
from chip8.quirks import Quirks
from chip8.scheduler import Scheduler
from chip8.vm import Chip8VM


def test_defaults() -> None:
    config = MachineConfig()
    assert config.cpu_hz == 700
    assert config.timing == "fixed"
    assert config.quirks == Quirks()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"cpu_hz": 0},
        {"cpu_hz": 200_000},
        {"timing": "warp"},
        {"max_catchup_seconds": 0},
    ],
)
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        MachineConfig(**kwargs)


def test_json_round_trip(tmp_path) -> None:
    config = MachineConfig(
        name="test",
        cpu_hz=1000,
        timing="vip",
        rng_seed=99,
        quirks=Quirks(clip_sprites=True),
    )
    path = tmp_path / "machine.json"
    config.save(str(path))

    assert MachineConfig.load(str(path)) == config


def test_from_dict_rejects_unknown_quirk() -> None:
    with pytest.raises(ValueError):
        MachineConfig.from_dict({"quirks": {"wobble": True}})


def test_from_env_overlays_variables(monkeypatch) -> None:
    monkeypatch.setenv("CHIP8_CPU_HZ", "1200")
    monkeypatch.setenv("CHIP8_TIMING", " VIP ")
    monkeypatch.setenv("CHIP8_RNG_SEED", "0x10")
    monkeypatch.setenv("CHIP8_QUIRK_SHIFT_USES_VY", "1")
    monkeypatch.setenv("CHIP8_QUIRK_CLIP_SPRITES", "off")

    config = MachineConfig.from_env(MachineConfig(quirks=Quirks(clip_sprites=True)))

    assert config.cpu_hz == 1200
    assert config.timing == "vip"
    assert config.rng_seed == 16
    assert config.quirks.shift_uses_vy
    assert not config.quirks.clip_sprites


def test_from_env_without_variables_keeps_base(monkeypatch) -> None:
    for name in ("CHIP8_CPU_HZ", "CHIP8_TIMING", "CHIP8_RNG_SEED"):
        monkeypatch.delenv(name, raising=False)
    for quirk in Quirks.names():
        monkeypatch.delenv(f"CHIP8_QUIRK_{quirk.upper()}", raising=False)

    base = MachineConfig.for_model("cosmac-vip")
    assert MachineConfig.from_env(base) == base


def test_from_env_rejects_garbage(monkeypatch) -> None:
    monkeypatch.setenv("CHIP8_CPU_HZ", "fast")
    with pytest.raises(ValueError):
        MachineConfig.from_env()


def test_models() -> None:
    vip = MachineConfig.for_model("cosmac-vip")
    assert vip.timing == "vip"
    assert vip.quirks == Quirks.cosmac_vip()

    assert MachineConfig.for_model("modern") == MachineConfig()
    assert MachineConfig.for_model("unknown") == MachineConfig()


def test_create_machine_wires_config_through() -> None:
    config = MachineConfig(cpu_hz=900, rng_seed=5, quirks=Quirks.cosmac_vip())
    vm, scheduler = create_machine(config)

    assert isinstance(vm, Chip8VM)
    assert isinstance(scheduler, Scheduler)
    assert scheduler.vm is vm
    assert scheduler.cpu_hz == 900
    assert vm.quirks.clip_sprites
    assert vm.rng_seed == 5
