import pytest

from solong.colors import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("thistle4", 0x8B7B8B),
        ("lightgreen", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent():
    assert lookup_color("none") == -1


def test_lookup_ignores_case():
    assert lookup_color("WHITE") == lookup_color("white")
    assert lookup_color("Ghost White") == 0xF8F8FF


def test_unknown_name_gives_none():
    assert lookup_color("no such colour") is None


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_gray_and_grey_spellings_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_grey_levels_are_neutral_and_increasing():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values[0] == 0
    assert values[-1] == 0xFFFFFF
    assert values == sorted(values)
    for value in values:
        red, green, blue = value >> 16, (value >> 8) & 0xFF, value & 0xFF
        assert red == green == blue


def test_spaced_and_joined_names_agree():
    for spaced, joined in [
        ("alice blue", "aliceblue"),
        ("misty rose", "mistyrose"),
        ("dark orange", "darkorange"),
        ("medium purple", "mediumpurple"),
    ]:
        assert lookup_color(spaced) == lookup_color(joined)


def test_all_known_values_fit_in_rgb():
    names = ["snow", "cyan4", "deeppink3", "gold", "dodgerblue2", "tan"]
    for name in names:
        value = lookup_color(name)
        assert 0 <= value <= 0xFFFFFF