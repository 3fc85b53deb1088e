import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from alns_engine.alns.config import ALNSConfig
from alns_engine.benchmarks import (
    FillAllRepair,
    GreedyFillRepair,
    OneMaxProblem,
    RandomFlipDestroy,
    WorstFlipDestroy,
)


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def config():
    return ALNSConfig(log_interval=0)


@pytest.fixture
def one_max():
    return OneMaxProblem(20)


@pytest.fixture
def destroy_ops():
    return [RandomFlipDestroy(), WorstFlipDestroy()]


@pytest.fixture
def repair_ops():
    return [GreedyFillRepair(), FillAllRepair()]
