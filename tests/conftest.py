import os

import pytest

QUINE = [109, 1, 204, -1, 1001, 100, 1, 100, 1008, 100, 16, 101, 1006, 101, 0, 99]

LINEAR_AMP = [3, 15, 3, 16, 1002, 16, 10, 16, 1, 16, 15, 15, 4, 15, 99, 0, 0]

FEEDBACK_AMP = [
    3, 26, 1001, 26, -4, 26, 3, 27, 1002, 27, 2, 27, 1, 27, 26,
    27, 4, 27, 1001, 28, -1, 28, 1005, 28, 6, 99, 0, 0, 5,
]


def pytest_addoption(parser):
    parser.addoption(
        "--vm-trace",
        action="store_true",
        help="Log every executed Intcode instruction during tests",
    )


def pytest_configure(config):
    if config.getoption("--vm-trace"):
        os.environ["INTCODE_TRACE"] = "1"
        from intcode import debug

        debug.enable(True)


@pytest.fixture
def quine():
    return list(QUINE)


@pytest.fixture
def linear_amp():
    return list(LINEAR_AMP)


@pytest.fixture
def feedback_amp():
    return list(FEEDBACK_AMP)


@pytest.fixture
def vm_config():
    from intcode import VMConfig

    return VMConfig.from_env()
