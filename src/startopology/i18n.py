"""Simple two-language (en/ru) translation helper."""

LANGUAGES = ("en", "ru")

_STRINGS: dict[str, dict[str, str]] = {
    "done": {
        "en": "Done!",
        "ru": "Работа выполнена!",
    },
    "saved": {
        "en": "Saved: {path}",
        "ru": "Сохранено: {path}",
    },
    "error_format": {
        "en": "The table has an invalid format ({error})",
        "ru": "Таблица имеет неправильный формат ({error})",
    },
    "error_io": {
        "en": "Cannot access file ({error})",
        "ru": "Нет доступа к файлу ({error})",
    },
    "error_degenerate": {
        "en": "Degenerate catalog ({error})",
        "ru": "Вырожденный каталог ({error})",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
