from __future__ import annotations

import logging

import pytest

from shelfsync.domain.palette import lookup_color_hex


def test_known_color_is_case_insensitive() -> None:
    assert lookup_color_hex("Чорний") == "#000000"


def test_whitespace_is_normalised() -> None:
    assert lookup_color_hex("  світло   молочний ") == "#FFF8E7"


def test_unknown_color_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="shelfsync.domain.palette"):
        assert lookup_color_hex("фуксія") is None

    assert "фуксія" in caplog.text
