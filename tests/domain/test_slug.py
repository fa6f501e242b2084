from __future__ import annotations

import pytest

from shelfsync.domain.slug import slugify


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Одяг", "odiag"),
        ("Пальта", "palta"),
        ("Пальто (жіноче)", "palto-zhinoche"),
        ("Men's Coats", "mens-coats"),
        ("Кар’єра", "kariera"),
        ("  Верхній   одяг ", "verkhnii-odiag"),
    ],
)
def test_slugify(name: str, expected: str) -> None:
    assert slugify(name) == expected


def test_slugify_is_deterministic() -> None:
    assert slugify("Сукні та спідниці") == slugify("Сукні та спідниці")
