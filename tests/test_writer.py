import logging
from pathlib import Path

import pytest

from branch2ports.common import PortResult
from branch2ports.writer import generate_env_content, write_ports_to_file

PORTS = [
    PortResult(service="frontend", port=3123, env_var="FRONTEND_PORT"),
    PortResult(service="backend", port=5123, env_var="BACKEND_PORT"),
]


def test_generate_env_content() -> None:
    assert generate_env_content(PORTS) == "FRONTEND_PORT=3123\nBACKEND_PORT=5123\n"


def test_generate_env_content_single_port() -> None:
    assert generate_env_content(PORTS[:1]) == "FRONTEND_PORT=3123\n"


def test_generate_env_content_empty() -> None:
    assert generate_env_content([]) == "\n"


def test_write_ports_to_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    output = tmp_path / ".env.test"

    with caplog.at_level(logging.INFO, logger="branch2ports"):
        written = write_ports_to_file(PORTS, str(output))

    assert written == str(output.resolve())
    assert output.read_text(encoding="utf-8") == "FRONTEND_PORT=3123\nBACKEND_PORT=5123\n"
    table = caplog.records[0].getMessage()
    assert "FRONTEND_PORT" in table and "3123" in table and "frontend" in table


def test_write_ports_to_file_overwrites(tmp_path: Path) -> None:
    output = tmp_path / ".env"
    output.write_text("STALE=1\n")
    write_ports_to_file([], str(output))
    assert output.read_text() == "\n"
