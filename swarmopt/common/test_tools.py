# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
from . import tools


class _Dummy:
    def __init__(self, first: int, second: float = 1.0, third: str = "ring", _private: int = 0) -> None:
        self.first = first
        self.second = second
        self.third = third
        self._private = _private


def test_different_from_defaults() -> None:
    instance = _Dummy(3, third="random", _private=12)
    output = tools.different_from_defaults(instance=instance)
    assert output == {"third": "random"}


def test_different_from_defaults_with_dict() -> None:
    instance = _Dummy(3)
    data: tp.Dict[str, tp.Any] = {"second": 2.0}
    output = tools.different_from_defaults(instance=instance, instance_dict=data)
    assert output == {"second": 2.0}
