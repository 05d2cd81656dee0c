# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class SwarmoptError(Exception):
    """Base class for error raised by swarmopt"""


class SwarmoptWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class ConfigurationError(ValueError, SwarmoptError):
    """Invalid run configuration (dimension, swarm size, bounds, coefficients or strategy names).
    Raised before any swarm state is allocated.
    """


class FrozenConfigurationError(AttributeError, SwarmoptError):
    """Configurations cannot be modified once built, use spawn instead"""


class ResourceExhaustionError(MemoryError, SwarmoptError):
    """Swarm state could not be allocated"""


# warnings


class SwarmoptRuntimeWarning(RuntimeWarning, SwarmoptWarning):
    """Runtime warning raised by swarmopt"""


class NumericAnomalyWarning(SwarmoptRuntimeWarning):
    """The objective function returned NaN or an infinite value, which is handled as +inf"""


class SwarmSizeCappedWarning(SwarmoptRuntimeWarning):
    """The requested swarm size was above the safety maximum and was capped"""
