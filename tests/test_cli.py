"""Tests for the eventpages CLI."""

import json
import logging

import pytest
from click.testing import CliRunner

from conftest import FakeTransport
from eventpages import __version__
from eventpages import __main__ as cli_module
from eventpages.__main__ import cli

PLACES_URL = "https://example.com/nearby-cities.json"


class ContextFakeTransport(FakeTransport):
    """FakeTransport usable where an HttpxTransport is expected."""

    def __init__(self, config=None):
        super().__init__(
            {PLACES_URL: json.dumps([{"name": "Testville", "distance": 12.3, "direction": "NE"}])}
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture(autouse=True)
def _restore_logging():
    """The render command configures root logging; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def event_file(tmp_path):
    path = tmp_path / "event.json"
    path.write_text(
        json.dumps(
            {
                "id": "us1000abcd",
                "properties": {
                    "products": {
                        "origin": [
                            {
                                "source": "us",
                                "code": "1000abcd",
                                "updateTime": 100,
                                "properties": {"magnitude": "6.1"},
                                "contents": {"nearby-cities.json": {"url": PLACES_URL}},
                            }
                        ],
                        "dyfi": [
                            {"source": "us", "code": "1000abcd", "updateTime": 100},
                            {"source": "us", "code": "1000abcd", "updateTime": 200},
                        ],
                    }
                },
            }
        )
    )
    return path


class TestCli:
    """Tests for the CLI group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_modules(self, runner):
        result = runner.invoke(cli, ["modules"])

        assert result.exit_code == 0
        assert "general-summary" in result.output
        assert "dyfi" in result.output

    def test_modules_with_event(self, runner, event_file):
        result = runner.invoke(cli, ["modules", str(event_file)])

        assert result.exit_code == 0
        assert "yes" in result.output


class TestRenderCommand:
    """Tests for `eventpages render`."""

    def test_render_general_summary(self, runner, event_file, tmp_path, monkeypatch):
        monkeypatch.setattr(cli_module, "HttpxTransport", ContextFakeTransport)

        result = runner.invoke(
            cli,
            ["render", str(event_file), "--module", "general-summary", "--config", str(tmp_path / "none.yaml")],
        )

        assert result.exit_code == 0, result.output
        assert "12.3 km (7.6 mi) NE of Testville" in result.output
        assert 'class="module module-general-summary"' in result.output

    def test_render_specific_version_to_file(self, runner, event_file, tmp_path, monkeypatch):
        monkeypatch.setattr(cli_module, "HttpxTransport", ContextFakeTransport)
        output = tmp_path / "dyfi.html"

        result = runner.invoke(
            cli,
            [
                "render",
                str(event_file),
                "--module",
                "dyfi",
                "--source",
                "us",
                "--code",
                "1000abcd",
                "--update-time",
                "100",
                "--config",
                str(tmp_path / "none.yaml"),
                "--output",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        html = output.read_text()
        assert "module-dyfi" in html
        assert "View alternative" not in html
        assert 'class="unpreferred"' in html

    def test_unknown_module(self, runner, event_file):
        result = runner.invoke(cli, ["render", str(event_file), "--module", "shakemap"])

        assert result.exit_code != 0
        assert "unknown module" in result.output

    def test_invalid_event_file(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(
            cli, ["render", str(path), "--module", "dyfi", "--config", str(tmp_path / "none.yaml")]
        )

        assert result.exit_code != 0
        assert "Unable to load event" in result.output

    def test_invalid_config(self, runner, event_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("eventpages: [unclosed\n")

        result = runner.invoke(cli, ["render", str(event_file), "--module", "dyfi", "--config", str(config)])

        assert result.exit_code != 0
        assert "Invalid configuration file" in result.output
