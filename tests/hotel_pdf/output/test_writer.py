"""
Tests for hotel_pdf.output.writer
"""

import pytest

from halo_toolkit.hotel_pdf.errors import BUILD_FAILED_MESSAGE, BuildError
from halo_toolkit.hotel_pdf.output.writer import save_pdf


class TestSavePdf:
    """Tests for save_pdf."""

    def test_writes_file_and_creates_directory(self, tmp_path):
        # Arrange
        out_dir = tmp_path / "nested" / "out"

        # Act
        path = save_pdf(b"%PDF-1.4 test", out_dir, "hotel-recommendations-acme-2026-03-14.pdf")

        # Assert
        assert path == out_dir / "hotel-recommendations-acme-2026-03-14.pdf"
        assert path.read_bytes() == b"%PDF-1.4 test"
        assert [p.name for p in out_dir.iterdir()] == [path.name]

    def test_existing_file_is_replaced(self, tmp_path):
        save_pdf(b"old", tmp_path, "a.pdf")
        path = save_pdf(b"new", tmp_path, "a.pdf")
        assert path.read_bytes() == b"new"

    def test_when_directory_cannot_be_created_then_raises_build_error(self, tmp_path):
        # Arrange
        blocker = tmp_path / "blocker"
        blocker.write_text("a file where a directory should be")

        # Act / Assert
        with pytest.raises(BuildError) as exc:
            save_pdf(b"%PDF", blocker / "out", "a.pdf")
        assert str(exc.value) == BUILD_FAILED_MESSAGE
        assert isinstance(exc.value.__cause__, OSError)
