# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp


def different_from_defaults(
    *,
    instance: tp.Any,
    instance_dict: tp.Optional[tp.Dict[str, tp.Any]] = None,
) -> tp.Dict[str, tp.Any]:
    """Public attributes whose value differs from the default of the
    corresponding keyword argument of the constructor (used for short reprs)

    Parameters
    ----------
    instance: object
        the object to inspect
    instance_dict: dict
        the attributes to compare, defaults to instance.__dict__
    """
    values = instance.__dict__ if instance_dict is None else instance_dict
    parameters = inspect.signature(type(instance).__init__).parameters
    return {
        name: values[name]
        for name, param in parameters.items()
        if name in values
        and not name.startswith("_")
        and param.default is not inspect.Parameter.empty
        and param.default != values[name]
    }
