"""Fusion strategy registry and factory."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Union

from hybridfuse.core.config import FusionConfig
from hybridfuse.core.exceptions import ConfigurationError
from hybridfuse.core.interfaces import FusionStrategy
from hybridfuse.core.models import FusionAlgorithm
from hybridfuse.fusion.ranked import RankedFusion
from hybridfuse.fusion.relative import RelativeScoreFusion

StrategyFactory = Callable[[FusionConfig], FusionStrategy]

_STRATEGIES: Dict[str, StrategyFactory] = {
    FusionAlgorithm.RANKED.value: lambda config: RankedFusion(config.ranked),
    FusionAlgorithm.RELATIVE_SCORE.value: lambda config: RelativeScoreFusion(config.relative),
}


def register_fusion_strategy(name: str, factory: StrategyFactory) -> None:
    """
    Register an additional fusion algorithm.

    Args:
        name: Algorithm name callers select it by
        factory: Callable building the strategy from a FusionConfig

    Raises:
        ConfigurationError: If the name is already registered
    """
    if name in _STRATEGIES:
        raise ConfigurationError(f"Fusion algorithm already registered: {name}")
    _STRATEGIES[name] = factory


def unregister_fusion_strategy(name: str) -> None:
    """Remove a custom fusion algorithm; built-in algorithms cannot be removed."""
    if name in {algorithm.value for algorithm in FusionAlgorithm}:
        raise ConfigurationError(f"Cannot unregister built-in fusion algorithm: {name}")
    _STRATEGIES.pop(name, None)


def available_algorithms() -> list[str]:
    """Names of all selectable fusion algorithms."""
    return list(_STRATEGIES)


def resolve_algorithm(algorithm: Union[FusionAlgorithm, str]) -> Union[FusionAlgorithm, str]:
    """
    Normalize an algorithm selector.

    Returns the enum member for built-in algorithms and the plain name for
    registered custom ones.

    Raises:
        ConfigurationError: If the algorithm is unknown
    """
    name = algorithm.value if isinstance(algorithm, FusionAlgorithm) else str(algorithm)
    if name not in _STRATEGIES:
        raise ConfigurationError(
            f"Unsupported fusion algorithm: {name}",
            details={"supported_algorithms": available_algorithms()},
        )
    try:
        return FusionAlgorithm(name)
    except ValueError:
        return name


def create_fusion_strategy(
    algorithm: Union[FusionAlgorithm, str],
    config: Optional[Union[FusionConfig, dict]] = None,
) -> FusionStrategy:
    """
    Create a fusion strategy by algorithm name.

    Args:
        algorithm: Algorithm selector
        config: Fusion configuration object or dict

    Returns:
        Configured FusionStrategy instance

    Raises:
        ConfigurationError: If the algorithm is not supported
    """
    if config is None:
        config = FusionConfig()
    elif isinstance(config, dict):
        config = FusionConfig(**config)

    resolved = resolve_algorithm(algorithm)
    name = resolved.value if isinstance(resolved, FusionAlgorithm) else resolved
    return _STRATEGIES[name](config)
