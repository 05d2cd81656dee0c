# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Type aliases shared by the package, import it as :code:`import swarmopt.common.typing as tp`"""
# pylint: disable=unused-import
from typing import Any as Any
from typing import Type as Type
from typing import TypeVar as TypeVar
from typing import Optional as Optional
from typing import Union as Union
from typing import Dict as Dict
from typing import Tuple as Tuple
from typing import List as List
from typing import Sequence as Sequence
from typing import MutableMapping as MutableMapping
from typing import Iterator as Iterator
from typing import Iterable as Iterable
from typing import Callable as Callable
from typing import TYPE_CHECKING as TYPE_CHECKING
from typing_extensions import Protocol

import numpy as _np


ArrayLike = Union[Tuple[float, ...], List[float], _np.ndarray]
# a bound is either shared by all dimensions, or given for each of them
BoundValue = Union[float, int, Sequence[float], _np.ndarray]
FloatLoss = float
RandomLike = Optional[Union[int, _np.random.RandomState]]


class ObjectiveFunction(Protocol):
    """Function to minimize, called with a position (1-D array) and the extra arguments of the run"""

    # pylint: disable=pointless-statement, unused-argument
    def __call__(self, x: _np.ndarray, *args: Any) -> float:
        ...
