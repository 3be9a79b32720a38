import pytest

from taglog.loglevel import LogLevel, level_from_string


@pytest.mark.parametrize(
    "level, expected",
    [
        (LogLevel.DEBUG, "DEBUG"),
        (LogLevel.INFO, "INFO"),
        (LogLevel.WARN, "WARN"),
        (LogLevel.ERROR, "ERROR"),
        (LogLevel.VERBOSE, "VERBOSE"),
        (LogLevel(0), "VERBOSE"),
    ],
)
def test_level_to_string(level, expected):
    assert str(level) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("debug", LogLevel.DEBUG),
        ("Debug", LogLevel.DEBUG),
        ("warn", LogLevel.WARN),
        ("Warning", LogLevel.WARN),
        ("error", LogLevel.ERROR),
        ("INFO", LogLevel.INFO),
        ("Informative", LogLevel.INFO),
        ("verBose", LogLevel.VERBOSE),
        ("none", LogLevel.DEFAULT),
    ],
)
def test_from_string(text, expected):
    assert level_from_string(text) is expected


def test_parsed_levels_are_ordered():
    parsed = [
        level_from_string(name)
        for name in ("none", "verbose", "debug", "info", "warn", "error")
    ]
    assert sorted(parsed) == parsed
    assert parsed[0] == 0
    assert [str(level) for level in parsed[1:]] == [
        "VERBOSE",
        "DEBUG",
        "INFO",
        "WARN",
        "ERROR",
    ]