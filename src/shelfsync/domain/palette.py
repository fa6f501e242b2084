"""Display colors for the color names used in the source catalog."""

from __future__ import annotations

from logging import getLogger
from typing import Final

log = getLogger(__name__)

COLOR_HEX: Final[dict[str, str]] = {
    "чорний": "#000000",
    "білий": "#FFFFFF",
    "червоний": "#FF0000",
    "синій": "#0000FF",
    "коричневий": "#8B4513",
    "світло молочний": "#FFF8E7",
    "молочний": "#FFF9E3",
    "світло-молочний": "#FFF8E7",
    "світло молочний (бежевий ведмедик)": "#EFE3D4",
    "світло молочний (сірий ведмедик)": "#F5F3F0",
    "світло молоч": "#FFF8E7",
    "бежевий": "#F5F5DC",
    "світло бежевий": "#F5DEB3",
    "бежевий меланж": "#D1BCA8",
    "ялинка бежева": "#F5F5DC",
    "крем": "#FFFDD0",
    "кремовий": "#FFFDD0",
    "беж": "#F5F5DC",
    "сірий": "#808080",
    "світло сірий": "#D3D3D3",
    "світло сірий 02": "#DADADA",
    "графіт": "#2F4F4F",
    "кашка сіра": "#BEBEBE",
    "сірий меланж": "#A9A9A9",
    "сірий (шарк)": "#778899",
    "сірий рубчик": "#8A8A8A",
    "сірий мікімаус": "#808080",
    "сірий коса": "#909090",
    "sirij-melanz": "#A9A9A9",
    "sirij": "#808080",
    "сніжний меланж": "#F5F5F5",
    "шоколад рубчик": "#4B2E18",
    "темний шоколад рубчик": "#3E2723",
    "білий рубчик": "#FFFFFF",
    "чорний рубчик": "#000000",
    "білий коса": "#FFFFFF",
    "чорний коса": "#000000",
    "шоколад": "#5D3A1A",
    "мокко": "#967969",
    "темний шоколад": "#3E2723",
    "шоколадний": "#5D3A1A",
    "світлий кемел": "#D2B48C",
    "кемел": "#C19A6B",
    "блакитний": "#5BC0EB",
    "блакитний темний": "#005A9C",
    "небесний (петля)": "#87CEEB",
    "блакитний мікімаус": "#5BC0EB",
    "сірий блакитний": "#6699CC",
    "бірюза": "#30D5C8",
    "оливка": "#708238",
    "хакі": "#4B5320",
    "квіточки зелений": "#228B22",
    "зелений": "#008000",
    "лаванда": "#E6E6FA",
    "електрик": "#0050FF",
    "бордо": "#800020",
    "бургунді": "#811A21",
    "малиновий": "#D52D5D",
    "малина": "#C2185B",
    "малинова": "#C2185B",
    "рожевий": "#FFC0CB",
    "квіточки рожевий": "#FFA6C9",
    "пудра": "#F8D1D1",
    "маршмелоу": "#FFEFFB",
    "гірчиця": "#FFDB58",
    "жовтий": "#FFFF00",
    "темний кемел": "#A68064",
    "темно сірий": "#696969",
    "оlivka": "#808000",
    "чорний в квітку": "#000000",
    "чорний тіар": "#060606",
    "чорний щільний": "#131313",
    "сердечка коричневі": "#8B4513",
    "сердечка": "#FFB6C1",
    "сердечка сірий": "#C0C0C0",
    "сердечка рожеві": "#FFC0CB",
    "середечка коричневі": "#8B4513",
    "горошок сіро білий": "#EAEAEA",
    "горошок попелястий": "#C0C0C0",
    "гусяча лапка чорно-біла": "#000000",
    "леопард": "#D2A679",
    "кактус": "#228B22",
    "ялинка сіра": "#BEBEBE",
    "ялинка пісочна": "#DEB887",
    "ялинка бежевий": "#F5F5DC",
    "elektrik": "#0050FF",
    "dzins": "#3A6F9A",
    "dzins в смужку": "#3A6F9A",
    "небесний": "#87CEEB",
    "blisk": "#E5E4E2",
    "zovtij": "#FFFF00",
    "sirij rubcik": "#8A8A8A",
    "sirij kosa": "#909090",
}


def lookup_color_hex(name: str) -> str | None:
    """Return the display color for ``name``, or ``None`` when it is not in the palette."""

    key = " ".join(name.split()).casefold()
    hex_value = COLOR_HEX.get(key)
    if hex_value is None:
        log.warning("No display color known for %r; add it to the palette", name)
    return hex_value
