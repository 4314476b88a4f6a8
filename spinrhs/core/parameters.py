"""
Parameter bundle for LLG right-hand-side evaluation.

The bundle mirrors the configuration record used by the surrounding
simulation driver: an ``llg`` section with integration-control fields and
the damping coefficient, and a ``current`` section with the in-plane
current densities. Only ``llg.damping``, ``current.jx`` and ``current.jy``
are read by the RHS evaluator; the remaining fields belong to the
integrator and the field provider.
"""

import json
import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .exceptions import ConfigError


class Mode(Enum):
    """Evaluation mode of the RHS."""

    RELAXATION = "relaxation"
    DYNAMICS = "dynamics"

    @classmethod
    def coerce(cls, value: Union["Mode", str]) -> "Mode":
        """
        Convert a mode name or value to a Mode.

        Booleans are rejected on purpose: ``True`` used to mean
        "relaxation run" and is ambiguous at call sites.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for mode in cls:
                if key == mode.value:
                    return mode
        raise ConfigError("mode", f"expected one of {[m.value for m in cls]}, got {value!r}")


def _real(section: str, name: str, value: Any) -> float:
    dotted = f"{section}.{name}"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(dotted, f"expected a real number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ConfigError(dotted, f"must be finite, got {value}")
    return value


def _count(section: str, name: str, value: Any) -> int:
    dotted = f"{section}.{name}"
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(dotted, f"expected an integer, got {type(value).__name__}")
    if value < 1:
        raise ConfigError(dotted, f"must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class LLGParameters:
    """
    Integration-control section of the parameter bundle.

    Args:
        damping: Gilbert damping coefficient (dimensionless, >= 0)
        t_max: Final simulation time
        h_step: Integration step size
        neighbor_count: Number of neighbours used by the field provider
        tolerance: Convergence tolerance of the integrator
        temperature: Temperature used by the (stochastic) field provider
        run_count: Number of independent runs
        parallel: Whether the driver runs in parallel
    """

    damping: float
    t_max: float = 1.0
    h_step: float = 0.01
    neighbor_count: int = 4
    tolerance: float = 1e-6
    temperature: float = 0.0
    run_count: int = 1
    parallel: bool = False

    def __post_init__(self):
        damping = _real("llg", "damping", self.damping)
        if damping < 0:
            raise ConfigError("llg.damping", f"must be >= 0, got {damping}")
        h_step = _real("llg", "h_step", self.h_step)
        if h_step <= 0:
            raise ConfigError("llg.h_step", f"must be > 0, got {h_step}")
        temperature = _real("llg", "temperature", self.temperature)
        if temperature < 0:
            raise ConfigError("llg.temperature", f"must be >= 0, got {temperature}")
        if not isinstance(self.parallel, bool):
            raise ConfigError("llg.parallel", f"expected a bool, got {type(self.parallel).__name__}")

        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "damping", damping)
        object.__setattr__(self, "h_step", h_step)
        object.__setattr__(self, "temperature", temperature)
        object.__setattr__(self, "t_max", _real("llg", "t_max", self.t_max))
        object.__setattr__(self, "tolerance", _real("llg", "tolerance", self.tolerance))
        _count("llg", "neighbor_count", self.neighbor_count)
        _count("llg", "run_count", self.run_count)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LLGParameters":
        if not isinstance(data, Mapping):
            raise ConfigError("llg", f"expected a mapping, got {type(data).__name__}")
        values = dict(data)
        if "lambda" in values:
            if "damping" in values:
                raise ConfigError("llg.damping", "given both as 'damping' and 'lambda'")
            values["damping"] = values.pop("lambda")
        if "damping" not in values:
            raise ConfigError("llg.damping")
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"llg.{sorted(unknown)[0]}", "unknown field")
        return cls(**values)


@dataclass(frozen=True)
class CurrentParameters:
    """In-plane current densities; zero means no torque along that axis."""

    jx: float
    jy: float

    def __post_init__(self):
        object.__setattr__(self, "jx", _real("current", "jx", self.jx))
        object.__setattr__(self, "jy", _real("current", "jy", self.jy))

    @property
    def has_current(self) -> bool:
        return self.jx != 0.0 or self.jy != 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CurrentParameters":
        if not isinstance(data, Mapping):
            raise ConfigError("current", f"expected a mapping, got {type(data).__name__}")
        for name in ("jx", "jy"):
            if name not in data:
                raise ConfigError(f"current.{name}")
        unknown = set(data) - {"jx", "jy"}
        if unknown:
            raise ConfigError(f"current.{sorted(unknown)[0]}", "unknown field")
        return cls(jx=data["jx"], jy=data["jy"])


@dataclass(frozen=True)
class SimulationParameters:
    """Shared configuration object handed to the evaluator and field provider."""

    llg: LLGParameters
    current: CurrentParameters
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationParameters":
        """
        Build parameters from a nested mapping.

        Args:
            data: Mapping with ``"llg"`` and ``"current"`` sections; any
                other top-level keys are kept in ``extra``

        Returns:
            SimulationParameters instance
        """
        if not isinstance(data, Mapping):
            raise ConfigError("parameters", f"expected a mapping, got {type(data).__name__}")
        for section in ("llg", "current"):
            if section not in data:
                raise ConfigError(section)

        extra = {k: v for k, v in data.items() if k not in ("llg", "current")}
        return cls(
            llg=LLGParameters.from_dict(data["llg"]),
            current=CurrentParameters.from_dict(data["current"]),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {"llg": asdict(self.llg), "current": asdict(self.current)}
        result.update(self.extra)
        return result


def load_parameters(filename: Union[str, Path]) -> SimulationParameters:
    """
    Load a parameter bundle from a JSON file.

    Args:
        filename: Path to the JSON file

    Returns:
        SimulationParameters instance
    """
    filepath = Path(filename)
    with open(filepath, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError("parameters", f"{filepath} is not valid JSON: {e}") from e
    return SimulationParameters.from_dict(data)


def save_parameters(params: SimulationParameters, filename: Union[str, Path]):
    """Save a parameter bundle to a JSON file."""
    with open(filename, 'w') as f:
        json.dump(params.to_dict(), f, indent=2)
