"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "AstraLink 밤하늘",
        "en": "AstraLink Sky View",
    },
    "label_place": {
        "ko": "장소 이름",
        "en": "Location name",
    },
    "label_lat": {
        "ko": "위도",
        "en": "Latitude",
    },
    "label_lon": {
        "ko": "경도",
        "en": "Longitude",
    },
    "label_speed": {
        "ko": "시간 속도",
        "en": "Time speed",
    },
    "label_labels": {
        "ko": "이름 표시",
        "en": "Show labels",
    },
    "label_constellations": {
        "ko": "별자리 선 표시",
        "en": "Show constellations",
    },
    "label_satellites": {
        "ko": "위성 표시",
        "en": "Show satellites",
    },
    "btn_go": {
        "ko": "✦ 이동",
        "en": "✦ Go",
    },
    "btn_now": {
        "ko": "현재 시각",
        "en": "Now",
    },
    "label_local_time": {
        "ko": "현지 시각 (YYYY-MM-DD HH:MM)",
        "en": "Local time (YYYY-MM-DD HH:MM)",
    },
    "label_tz": {
        "ko": "시간대",
        "en": "Time zone",
    },
    "btn_set_time": {
        "ko": "시각 적용",
        "en": "Set time",
    },
    "speed_paused": {
        "ko": "일시정지",
        "en": "Paused",
    },
    "heading_sky": {
        "ko": "밤하늘",
        "en": "Sky",
    },
    "heading_globe": {
        "ko": "지구",
        "en": "Globe",
    },
    "status_line": {
        "ko": "{name} · {time} UTC · 항성시 {lst:.2f}° · 별 {stars}개 · 선 {segments}개",
        "en": "{name} · {time} UTC · LST {lst:.2f}° · {stars} stars · {segments} lines",
    },
    "error_observer": {
        "ko": "좌표가 올바르지 않아요. ({error})",
        "en": "Invalid coordinates. ({error})",
    },
    "error_time": {
        "ko": "시각을 해석할 수 없어요. ({error})",
        "en": "Could not read that time. ({error})",
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
