from __future__ import annotations

import math

import pytest

from voronoiblend.model.colors import (
    RGB,
    average_hex_colors,
    color_distance,
    colors_are_similar,
    hex_to_rgb,
    normalize_hex,
    rgb_to_hex,
    round_half_up,
)


class TestHexToRgb:
    def test_full_form(self):
        assert hex_to_rgb("#FF5733") == RGB(255, 87, 51)

    def test_without_hash_and_lowercase(self):
        assert hex_to_rgb("ff5733") == (255, 87, 51)

    def test_shorthand_is_expanded(self):
        assert hex_to_rgb("#abc") == (0xAA, 0xBB, 0xCC)
        assert hex_to_rgb("abc") == (0xAA, 0xBB, 0xCC)

    @pytest.mark.parametrize("bad", ["", "#", "#12345", "#1234567", "#GGGGGG", "zzz", "##FFFFFF", "#FF 733"])
    def test_invalid_strings_return_none(self, bad):
        assert hex_to_rgb(bad) is None

    @pytest.mark.parametrize("padded", [" #FFFFFF ", "\tabc\n", "#FFFFFF\n", " abc"])
    def test_whitespace_padded_input_is_invalid(self, padded):
        assert hex_to_rgb(padded) is None

    def test_non_string_returns_none(self):
        assert hex_to_rgb(None) is None
        assert hex_to_rgb(0xFFFFFF) is None


class TestRgbToHex:
    def test_uppercase_with_hash(self):
        assert rgb_to_hex(171, 205, 239) == "#ABCDEF"

    def test_zero_padding(self):
        assert rgb_to_hex(0, 1, 15) == "#00010F"

    def test_out_of_range_is_clamped(self):
        assert rgb_to_hex(300, -5, 127.5) == "#FF0080"

    @pytest.mark.parametrize("channel", [0, 1, 2])
    def test_round_trip_every_channel_value(self, channel):
        for value in range(256):
            rgb = [17, 128, 240]
            rgb[channel] = value
            assert hex_to_rgb(rgb_to_hex(*rgb)) == tuple(rgb)


def test_normalize_hex():
    assert normalize_hex("#abc") == "#AABBCC"
    assert normalize_hex("ff0000") == "#FF0000"
    assert normalize_hex("nope") is None


def test_round_half_up():
    assert round_half_up(127.5) == 128
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2


class TestAverageHexColors:
    def test_empty_is_black(self):
        assert average_hex_colors([]) == "#000000"

    @pytest.mark.parametrize("color", ["#CB4533", "#000000", "#FFFFFF", "#7CB145"])
    def test_single_color_is_itself(self, color):
        assert average_hex_colors([color]) == color

    def test_two_colors(self):
        assert average_hex_colors(["#FF0000", "#FF0200"]) == "#FF0100"

    def test_halves_round_up(self):
        assert average_hex_colors(["#FF0000", "#00FF00"]) == "#808000"

    def test_invalid_entries_count_in_denominator(self):
        # 255 / 2 = 127.5 -> 128, the invalid entry pulls toward black
        assert average_hex_colors(["#FFFFFF", "zzz"]) == "#808080"

    def test_only_invalid_entries_is_black(self):
        assert average_hex_colors(["xyz", "nope"]) == "#000000"

    def test_accepts_iterators(self):
        assert average_hex_colors(iter(["#000000", "#0000FE"])) == "#00007F"


class TestSimilarity:
    def test_distance(self):
        assert color_distance("#000000", "#FFFFFF") == pytest.approx(math.sqrt(3) * 255)
        assert color_distance("#000000", "xyz") is None

    @pytest.mark.parametrize("threshold", [0.001, 1.0, 50.0])
    def test_color_is_similar_to_itself(self, threshold):
        assert colors_are_similar("#9580B5", "#9580B5", threshold)

    def test_black_and_white_are_not_similar(self):
        assert not colors_are_similar("#000000", "#FFFFFF", 50)

    def test_threshold_is_strict(self):
        # distance exactly 1
        assert not colors_are_similar("#FF0100", "#FF0000", 1.0)
        assert colors_are_similar("#FF0100", "#FF0000", 1.0001)

    def test_default_threshold(self):
        assert colors_are_similar("#FF0000", "#E00000")
        assert not colors_are_similar("#FF0000", "#C00000")

    def test_invalid_color_is_never_similar(self):
        assert not colors_are_similar("#FF0000", "#GG0000")
        assert not colors_are_similar("xyz", "xyz")
