# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp
try:
    import pytest
except ImportError:
    pass  # only parametrized requires pytest
import numpy as np


def assert_set_equal(estimate: tp.Iterable[tp.Any], reference: tp.Iterable[tp.Any], err_msg: str = "") -> None:
    """Asserts that both iterables hold the same elements, listing the
    additional and missing ones in the error message.
    """
    found, expected = set(estimate), set(reference)
    messages = [
        f"  - {label} element(s): {diff}."
        for label, diff in [("additional", found - expected), ("missing", expected - found)]
        if diff
    ]
    if messages:
        raise AssertionError("\n".join(([err_msg] if err_msg else []) + ["Sets are not equal:"] + messages))


def assert_in_box(points: np.ndarray, lower: np.ndarray, upper: np.ndarray, err_msg: str = "") -> None:
    """Asserts that all rows of points lie inside the box [lower, upper] (bounds included),
    and lists the offending coordinates otherwise.
    """
    points = np.atleast_2d(points)
    outside = np.argwhere((points < lower) | (points > upper))
    if outside.size:
        details = ", ".join(f"[{i}, {d}]={points[i, d]!r}" for i, d in outside[:10])
        raise AssertionError(f"{err_msg}\n{len(outside)} coordinate(s) out of bounds: {details}".strip())


class parametrized:
    """Named test cases for pytest: each keyword becomes the id of a case,
    and its tuple holds the values of the test function arguments, in order.

    Example
    -------

    .. code-block:: python

        @testing.parametrized(small=(1, 12), large=(1000, 73))
        def test_size(dimension: int, expected: int) -> None:
            ...
    """

    def __init__(self, **kwargs: tp.Tuple[tp.Any, ...]) -> None:
        assert kwargs, "At least one case is required"
        self.ids = sorted(kwargs)
        self.params = [kwargs[name] for name in self.ids]
        self.num_params = len(self.params[0])
        assert all(isinstance(p, (tuple, list)) and len(p) == self.num_params for p in self.params)

    def __call__(self, func: tp.Callable[..., None]) -> tp.Any:
        names = list(inspect.signature(func).parameters)
        assert len(names) == self.num_params, f"Expected {self.num_params} arguments but got {names}"
        values = self.params if self.num_params > 1 else [p[0] for p in self.params]
        return pytest.mark.parametrize(",".join(names), values, ids=self.ids)(func)
