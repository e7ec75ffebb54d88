from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

from tsp_insertion.common.constants import RNG_SEEDS, THRESHOLD, TOL_NUM, seed_everywhere

TEST_SEED = RNG_SEEDS.get("tests", 1337)
seed_everywhere(TEST_SEED)

settings.register_profile(
    "ci",
    max_examples=60,
    deadline=None,
    derandomize=True,
    print_blob=True,
    suppress_health_check=(
        HealthCheck.filter_too_much,
        HealthCheck.too_slow,
    ),
)
settings.load_profile("ci")


def pytest_configure(config: pytest.Config) -> None:  # pragma: no cover
    config.addinivalue_line("markers", "slow: mark test as slow")


@pytest.fixture(scope="session")
def tol() -> float:
    return TOL_NUM


@pytest.fixture(scope="session")
def threshold() -> float:
    return THRESHOLD
