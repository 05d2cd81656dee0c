# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
from . import errors


X = tp.TypeVar("X")


# pylint does not understand Dict[str, X],
# so we reimplement the MutableMapping interface
class Registry(tp.MutableMapping[str, X]):
    """Registers strategies or functions under a name, as a dict.

    Parameters
    ----------
    kind: str
        what is registered (eg: "topology"), used in error messages
    """

    def __init__(self, kind: str = "object") -> None:
        super().__init__()
        self.kind = kind
        self.data: tp.Dict[str, X] = {}

    def register(self, obj: X) -> X:
        """Decorator method registering a function or class under its name attribute
        (or its __name__ if it has none)
        """
        name = getattr(obj, "name", None)
        if not isinstance(name, str):
            name = getattr(obj, "__name__", obj.__class__.__name__)
        self.register_name(name, obj)
        return obj

    def register_name(self, name: str, obj: X) -> None:
        """Register an object with a provided name"""
        if name in self:
            raise RuntimeError(f'Encountered a name collision "{name}"')
        self[name] = obj

    def resolve(self, name: str) -> X:
        """Returns the registered object, or raises a ConfigurationError listing the available names"""
        if name not in self:
            raise errors.ConfigurationError(
                f'Unknown {self.kind} "{name}", choose among: {", ".join(sorted(self))}'
            )
        return self[name]

    def __getitem__(self, key: str) -> X:
        return self.data[key]

    def __setitem__(self, key: str, value: X) -> None:
        self.data[key] = value

    def __delitem__(self, key: str) -> None:
        del self.data[key]

    def __iter__(self) -> tp.Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)
