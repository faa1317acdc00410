import json
import logging

import pytest

from branch2ports.common import configure_logger, format_table


@pytest.fixture
def fresh_logger():
    name = "branch2ports-formatting"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_pretty_formatter_keeps_urls_and_paths_bare(
    fresh_logger: str, capsys: pytest.CaptureFixture
) -> None:
    logger = configure_logger(fresh_logger)
    logger.info(
        "repository",
        {"identity": "git@github.com:org/app.git", "path": "/work/app", "note": "two words"},
    )

    line = capsys.readouterr().err.strip()
    assert line.endswith(
        'INFO  branch2ports-formatting repository identity=git@github.com:org/app.git '
        'path=/work/app note="two words"'
    )


def test_json_formatter_merges_fields(fresh_logger: str, capsys: pytest.CaptureFixture) -> None:
    logger = configure_logger(fresh_logger, pretty=False)
    logger.info("offset", {"offset": 911, "range": 1000})

    payload = json.loads(capsys.readouterr().err.strip())
    assert payload["message"] == "offset"
    assert payload["offset"] == 911
    assert payload["range"] == 1000


def test_file_handler_does_not_replace_stream_handler(fresh_logger: str, tmp_path) -> None:
    log_file = str(tmp_path / "run.log")
    logger = configure_logger(fresh_logger, log_file=log_file)

    kinds = sorted(type(handler).__name__ for handler in logger.handlers)
    assert kinds == ["FileHandler", "StreamHandler"]

    logger.info("done")
    assert "done" in (tmp_path / "run.log").read_text()


def test_format_table() -> None:
    table = format_table(["env_var", "port"], [["WEB_PORT", "8991"]])
    assert table.splitlines() == [
        "+----------+------+",
        "| env_var  | port |",
        "+----------+------+",
        "| WEB_PORT | 8991 |",
        "+----------+------+",
    ]
