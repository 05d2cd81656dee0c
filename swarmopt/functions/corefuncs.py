# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from math import pi, e
import numpy as np
import swarmopt.common.typing as tp
from swarmopt.common.decorators import Registry


registry: Registry[tp.Callable[[np.ndarray], float]] = Registry("function")
# conventional search boxes of the functions (same bound in every dimension)
BOUNDS: tp.Dict[str, tp.Tuple[float, float]] = {}


def _register(lower: float, upper: float) -> tp.Callable[[tp.Callable[[np.ndarray], float]], tp.Callable[[np.ndarray], float]]:
    def decorator(func: tp.Callable[[np.ndarray], float]) -> tp.Callable[[np.ndarray], float]:
        registry.register(func)
        BOUNDS[func.__name__] = (lower, upper)
        return func

    return decorator


@_register(-100.0, 100.0)
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    x = np.asarray(x, dtype=float)
    assert x.ndim == 1
    return float(x.dot(x))


@_register(-2.048, 2.048)
def rosenbrock(x: np.ndarray) -> float:
    """Narrow curved valley, with minimum 0 at (1, ..., 1).
    Only defined for at least 2 dimensions."""
    x = np.asarray(x, dtype=float)
    if x.size < 2:
        raise ValueError("Rosenbrock function requires at least 2 dimensions")
    return float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


@_register(-600.0, 600.0)
def griewank(x: np.ndarray) -> float:
    """Multimodal function with many regularly distributed local minima."""
    x = np.asarray(x, dtype=float)
    part1 = np.sum(x ** 2) / 4000.0
    part2 = np.prod(np.cos(x / np.sqrt(1 + np.arange(x.size))))
    return float(1 + part1 - part2)


@_register(-5.12, 5.12)
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    x = np.asarray(x, dtype=float)
    return float(10.0 * x.size + np.sum(x ** 2 - 10.0 * np.cos(2.0 * pi * x)))


@_register(-32.0, 32.0)
def ackley(x: np.ndarray) -> float:
    """Multimodal function with a nearly flat outer region and a deep hole at 0."""
    x = np.asarray(x, dtype=float)
    dim = x.size
    sum_cos = np.sum(np.cos(2 * pi * x))
    return float(-20.0 * np.exp(-0.2 * np.sqrt(x.dot(x) / dim)) - np.exp(sum_cos / dim) + 20 + e)
