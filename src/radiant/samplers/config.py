"""Sampler configuration.

A :class:`SamplerConfig` holds the options recognized when a sampler is
built from named parameters (for instance from a scene description):

    jitter               Randomize samples within strata (default true)
    x-samples            Strata along x per pixel (default 4)
    y-samples            Strata along y per pixel (default 4)
    sampled-dimensions   Precomputed 1D and 2D dimensions (default 4)

The compact spellings ``xsamples``, ``ysamples`` and ``dimensions`` are
accepted as aliases.
"""

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

# Parameter name -> SamplerConfig attribute
_PARAM_NAMES: dict[str, str] = {
    "jitter": "jitter",
    "x-samples": "x_samples",
    "xsamples": "x_samples",
    "y-samples": "y_samples",
    "ysamples": "y_samples",
    "sampled-dimensions": "sampled_dimensions",
    "dimensions": "sampled_dimensions",
}

_BOOL_STRINGS: dict[str, bool] = {"true": True, "1": True, "false": False, "0": False}


def _parse_bool(name: str, value: Any) -> bool:
    """Convert a flag value given as a bool, 0/1 or a true/false string.

    Raises:
        ValueError: If the value is not a recognized flag.
    """
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    raise ValueError(f"Parameter {name!r} expects a boolean, got {value!r}")


@dataclass(frozen=True)
class SamplerConfig:
    """Construction options for a stratified sampler.

    Attributes:
        jitter: Whether samples are jittered within their strata.
        x_samples: Number of strata along x; must be positive.
        y_samples: Number of strata along y; must be positive.
        sampled_dimensions: Number of precomputed 1D and 2D sample
            dimensions; must be non-negative.
    """

    jitter: bool = True
    x_samples: int = 4
    y_samples: int = 4
    sampled_dimensions: int = 4

    def __post_init__(self) -> None:
        if self.x_samples <= 0 or self.y_samples <= 0:
            raise ValueError(
                f"Sample counts must be positive, got x_samples={self.x_samples}, "
                f"y_samples={self.y_samples}"
            )
        if self.sampled_dimensions < 0:
            raise ValueError(f"sampled_dimensions must be non-negative, got {self.sampled_dimensions}")

    @property
    def samples_per_pixel(self) -> int:
        """Total samples per pixel, x_samples * y_samples."""
        return self.x_samples * self.y_samples

    @classmethod
    def from_dict(cls, params: dict[str, Any]) -> "SamplerConfig":
        """Build a configuration from named parameters.

        Unknown names are logged and ignored. Missing names keep their
        defaults.

        Args:
            params: Mapping of parameter names to values.

        Returns:
            The validated configuration.

        Raises:
            ValueError: If a value is out of range or not convertible.
        """
        values: dict[str, Any] = {}
        for name, value in params.items():
            attr = _PARAM_NAMES.get(name.lower())
            if attr is None:
                logger.warning("Ignoring unknown sampler parameter %r", name)
                continue
            values[attr] = _parse_bool(name, value) if attr == "jitter" else int(value)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration using the canonical parameter names."""
        return {
            "jitter": self.jitter,
            "x-samples": self.x_samples,
            "y-samples": self.y_samples,
            "sampled-dimensions": self.sampled_dimensions,
        }
