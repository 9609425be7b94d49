"""Strategy registry — every analyzer strategy is a standalone function registered via decorator.

Usage:
    @strategy(name="direct", description="O(N^2) direct summation")
    def direct_transform(samples: NDArray[np.complex128]) -> tuple[NDArray[np.int64], NDArray[np.complex128]]:
        ...

A strategy takes the complex samples and returns (frequencies, coefficients),
unsorted, already divided by the sample count. Adding a strategy = creating
one module with the decorator and importing it from engine.strategies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

TransformFn = Callable[
    [NDArray[np.complex128]],
    tuple[NDArray[np.int64], NDArray[np.complex128]],
]


@dataclass
class StrategySpec:
    name: str
    fn: TransformFn
    description: str = ""
    # True: the analyzer rejects non-power-of-two input
    requires_power_of_two: bool = False


class StrategyRegistry:
    """Registry of harmonic analysis strategies, keyed by name."""

    def __init__(self) -> None:
        self._strategies: dict[str, StrategySpec] = {}

    def register(self, spec: StrategySpec) -> None:
        if spec.name in self._strategies:
            raise ValueError(f"Duplicate strategy name: {spec.name}")
        self._strategies[spec.name] = spec
        logger.debug("Registered analyzer strategy %s", spec.name)

    def get(self, name: str) -> StrategySpec:
        try:
            return self._strategies[name]
        except KeyError:
            known = ", ".join(self.names()) or "none"
            raise ValueError(f"Unknown analyzer strategy {name!r} (known: {known})") from None

    def names(self) -> list[str]:
        return sorted(self._strategies)

    def __contains__(self, name: object) -> bool:
        return name in self._strategies

    @property
    def count(self) -> int:
        return len(self._strategies)


# Module-level singleton
_registry = StrategyRegistry()


def get_registry() -> StrategyRegistry:
    return _registry


def strategy(
    *,
    name: str,
    description: str = "",
    requires_power_of_two: bool = False,
):
    """Decorator to register an analyzer strategy."""

    def decorator(fn: TransformFn):
        _registry.register(
            StrategySpec(
                name=name,
                fn=fn,
                description=description,
                requires_power_of_two=requires_power_of_two,
            )
        )
        return fn

    return decorator
