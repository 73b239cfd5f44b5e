"""
Tests for the run_hotel_pdf.py command line launcher.
"""

import importlib.util
import json
from pathlib import Path

import pytest

from halo_toolkit.hotel_pdf.errors import BuildError
from halo_toolkit.hotel_pdf.extraction import ExtractionError

LAUNCHER = Path(__file__).resolve().parent.parent / "run_hotel_pdf.py"


@pytest.fixture
def cli(monkeypatch):
    spec = importlib.util.spec_from_file_location("run_hotel_pdf", LAUNCHER)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    # Leave root logging to pytest
    monkeypatch.setattr(module, "configure_logging", lambda level: None)
    return module


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.json"
    path.write_text(json.dumps({
        "hotels": [{"name": "Casa Azul", "link": "https://booking.test/hotels/1"}],
        "clientName": "Acme",
    }))
    return path


class TestMain:
    """Tests for main()."""

    def test_builds_and_prints_pdf_path(self, cli, request_file, tmp_path, monkeypatch, capsys):
        # Arrange
        calls = []

        class Result:
            pdf_path = tmp_path / "out" / "hotel-recommendations-acme-2026-03-14.pdf"
            warnings = ("Image unavailable: https://img.test/x.jpg (HTTP 404)",)

        def fake_build(request, config):
            calls.append((request, config))
            return Result()

        monkeypatch.setattr(cli, "build_hotel_pdf_sync", fake_build)

        # Act
        code = cli.main([str(request_file), "--output-dir", str(tmp_path / "out"), "--token", "t0k"])

        # Assert
        assert code == 0
        request, config = calls[0]
        assert request.client_name == "Acme"
        assert config.output_dir == tmp_path / "out"
        assert config.api_token == "t0k"
        assert capsys.readouterr().out.strip() == str(Result.pdf_path)

    def test_when_request_invalid_then_exit_code_1(self, cli, tmp_path, monkeypatch):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"hotels": []}))
        monkeypatch.setattr(cli, "build_hotel_pdf_sync", pytest.fail)

        assert cli.main([str(bad)]) == 1

    def test_when_request_file_missing_then_exit_code_1(self, cli, tmp_path):
        assert cli.main([str(tmp_path / "missing.json")]) == 1

    def test_when_build_fails_then_exit_code_1(self, cli, request_file, monkeypatch):
        def fake_build(request, config):
            raise BuildError()

        monkeypatch.setattr(cli, "build_hotel_pdf_sync", fake_build)

        assert cli.main([str(request_file)]) == 1

    def test_when_extraction_fails_then_build_still_runs(self, cli, request_file, monkeypatch):
        # Arrange
        built = []

        async def failing_extract(request, config):
            raise ExtractionError("Network error: Could not reach server")

        class Result:
            pdf_path = Path("out.pdf")
            warnings = ()

        monkeypatch.setattr(cli, "_extract", failing_extract)
        monkeypatch.setattr(cli, "build_hotel_pdf_sync", lambda request, config: built.append(request) or Result())

        # Act
        code = cli.main([str(request_file), "--extract"])

        # Assert
        assert code == 0
        assert built[0].hotels[0].images == ()
