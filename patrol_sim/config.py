"""Configuration dataclasses and YAML loader for the guard patrol simulation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

DEFAULT_LAYOUT = Path("./data/day_6/input")


@dataclass
class SimulationSettings:
    exit_margin: int = 0  # cells reserved as "outside" on the low side


@dataclass
class SweepSettings:
    prune_to_path: bool = True
    workers: int = 1


@dataclass
class ExportSettings:
    csv: bool = False
    snapshot: bool = False
    gif: bool = False
    render: bool = False
    report: bool = False


@dataclass
class PatrolConfig:
    layout: Path = DEFAULT_LAYOUT
    simulation: SimulationSettings = field(default_factory=SimulationSettings)
    sweep: SweepSettings = field(default_factory=SweepSettings)
    export: ExportSettings = field(default_factory=ExportSettings)

    # CLI-only flags
    quiet: bool = False
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Fetch an optional mapping section from raw YAML data."""
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Section '{name}' must be a mapping")
    return value


def _parse_simulation(raw: Dict[str, Any]) -> SimulationSettings:
    exit_margin = int(raw.get('exit_margin', 0))
    if exit_margin not in (0, 1):
        raise ValueError(f"exit_margin must be 0 or 1, got {exit_margin}")
    return SimulationSettings(exit_margin=exit_margin)


def _parse_sweep(raw: Dict[str, Any]) -> SweepSettings:
    workers = int(raw.get('workers', 1))
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    return SweepSettings(
        prune_to_path=bool(raw.get('prune_to_path', True)),
        workers=workers
    )


def _parse_export(raw: Dict[str, Any]) -> ExportSettings:
    return ExportSettings(
        csv=raw.get('csv', False),
        snapshot=raw.get('snapshot', False),
        gif=raw.get('gif', False),
        render=raw.get('render', False),
        report=raw.get('report', False)
    )


def load_config(config_path: Optional[Path] = None) -> PatrolConfig:
    """Load and validate YAML configuration file (defaults if None)."""
    if config_path is None:
        return PatrolConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError("Configuration root must be a mapping")

    layout = raw.get('layout')

    return PatrolConfig(
        layout=Path(layout) if layout else DEFAULT_LAYOUT,
        simulation=_parse_simulation(_section(raw, 'simulation')),
        sweep=_parse_sweep(_section(raw, 'sweep')),
        export=_parse_export(_section(raw, 'export'))
    )
