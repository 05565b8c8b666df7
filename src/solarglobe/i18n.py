"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "태양 시계 지구본",
        "en": "Solar Globe",
    },
    "label_time": {
        "ko": "찾을 시각 (HH:MM)",
        "en": "Find time (HH:MM)",
    },
    "btn_find": {
        "ko": "찾기",
        "en": "Find",
    },
    "label_civil": {
        "ko": "현지 시각",
        "en": "Civil time",
    },
    "label_solar": {
        "ko": "태양시",
        "en": "Solar time",
    },
    "label_sun": {
        "ko": "태양 직하점",
        "en": "Sub-solar point",
    },
    "label_moon": {
        "ko": "달 직하점",
        "en": "Sub-lunar point",
    },
    "loading_data": {
        "ko": "도시 데이터를 불러오는 중... 잠시만 기다려 주세요",
        "en": "SYSTEM LOADING DATA... PLEASE WAIT",
    },
    "toast_found": {
        "ko": "찾음: {name}",
        "en": "FOUND: {name}",
    },
    "toast_fallback": {
        "ko": "도시를 찾지 못했어요. 해당 시간대 지역을 표시합니다 (경도 약 {lon})",
        "en": "NO CITY FOUND. SHOWING TIME ZONE AREA (approx LON {lon})",
    },
    "error_time": {
        "ko": "시각은 HH:MM 형식으로 입력해 주세요. ({error})",
        "en": "Enter the time as HH:MM. ({error})",
    },
    "error_dataset": {
        "ko": "도시 데이터를 불러올 수 없어요. ({error})",
        "en": "City data could not be loaded. ({error})",
    },
    "hint_sparse": {
        "ko": "번들 도시 목록은 {count}곳뿐이에요. `solarglobe convert`로 전체 목록을 만들어 보세요.",
        "en": "Only {count} bundled cities. Build the full list with `solarglobe convert`.",
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
