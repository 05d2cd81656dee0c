# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .config import Configuration
from .config import suggested_swarm_size
from .solver import SwarmSolver
from .solver import Result
from .solver import solve
from . import topologies
from . import inertia
from . import boundaries
from . import callbacks
