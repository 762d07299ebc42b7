"""Construction of samplers by name."""

import logging
from typing import Any

from radiant.samplers.base import Sampler, SamplerType
from radiant.samplers.config import SamplerConfig
from radiant.samplers.stratified import StratifiedSampler

logger = logging.getLogger(__name__)

_SAMPLER_CLASSES: dict[SamplerType, type[StratifiedSampler]] = {
    SamplerType.STRATIFIED: StratifiedSampler,
}


def sampler_type_from_name(name: str) -> SamplerType:
    """Look up the sampler variant for a name such as ``"stratified"``.

    Raises:
        ValueError: If the name does not match a known variant.
    """
    try:
        return SamplerType[name.strip().upper()]
    except KeyError:
        known = ", ".join(t.name.lower() for t in SamplerType)
        raise ValueError(f"Unknown sampler type: {name!r} (expected one of: {known})") from None


def create_sampler(
    name: str,
    params: dict[str, Any] | SamplerConfig | None = None,
    seed: int = 0,
) -> Sampler:
    """Create a sampler variant from its name and parameters.

    Args:
        name: Variant name, e.g. ``"stratified"``.
        params: Named parameters (see SamplerConfig) or a ready config.
        seed: Sequence index for the sampler's random stream.

    Returns:
        The constructed sampler.

    Raises:
        ValueError: If the name is unknown or a parameter is invalid.
    """
    sampler_type = sampler_type_from_name(name)
    if isinstance(params, SamplerConfig):
        config = params
    else:
        config = SamplerConfig.from_dict(params or {})
    sampler = _SAMPLER_CLASSES[sampler_type].from_config(config, seed=seed)
    logger.debug("Created %s sampler: %r", sampler_type.name.lower(), sampler)
    return sampler
