import logging
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from branch2ports.identity import StaticVersionControl


@pytest.fixture(autouse=True)
def _package_logger():
    # main() configures a non-propagating package logger; undo that per test
    # so caplog keeps seeing records.
    logger = logging.getLogger("branch2ports")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    logger.propagate = True
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def test_repo_vcs() -> StaticVersionControl:
    return StaticVersionControl(
        remote_url="https://github.com/test/repo.git",
        toplevel="/work/repo",
        branch="test-branch",
    )
