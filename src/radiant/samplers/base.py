"""Sampler interface shared by every sampler variant.

Samplers form a closed set of variants tagged by :class:`SamplerType`.
Integrators drive any variant through the :class:`Sampler` protocol.
"""

from enum import IntEnum
from typing import Protocol

import numpy as np
import numpy.typing as npt


class SamplerType(IntEnum):
    """Enumeration of sampler variants."""

    STRATIFIED = 0


class Sampler(Protocol):
    """Operations integrators use to draw samples."""

    sampler_type: SamplerType
    samples_per_pixel: int

    @property
    def current_pixel(self) -> tuple[int, int]: ...

    @property
    def current_sample_index(self) -> int: ...

    def start_pixel(self, p: tuple[int, int]) -> None: ...

    def start_next_sample(self) -> bool: ...

    def set_sample_number(self, sample_num: int) -> bool: ...

    def get_1d(self) -> float: ...

    def get_2d(self) -> tuple[float, float]: ...

    def round_count(self, n: int) -> int: ...

    def request_1d_array(self, n: int) -> None: ...

    def request_2d_array(self, n: int) -> None: ...

    def get_1d_array(self, n: int) -> npt.NDArray[np.float64] | None: ...

    def get_2d_array(self, n: int) -> npt.NDArray[np.float64] | None: ...

    def get_2d_arrays(
        self, n: int
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]] | tuple[None, None]: ...

    def reseed(self, seed: int) -> None: ...

    def clone_with_seed(self, seed: int) -> "Sampler": ...
