"""Tests for platform value coercion."""

from __future__ import annotations

import pytest


class TestParseFloat:
    """Leading-number parsing with JavaScript parseFloat semantics."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1.5rem", 1.5),
            ("-1px", -1.0),
            (".5em", 0.5),
            ("  12  ", 12.0),
            (8, 8.0),
        ],
    )
    def test_parses_leading_number(self, value, expected):
        from tokensync.core.coercion import parse_float

        assert parse_float(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, "px10"])
    def test_unparsable_is_none(self, value):
        from tokensync.core.coercion import parse_float

        assert parse_float(value) is None


class TestReactNativeUnits:
    """CSS length -> React Native density-independent value."""

    def test_rem_is_multiplied_by_16(self):
        from tokensync.core.coercion import length_to_rn_unit

        assert length_to_rn_unit("1rem") == 16
        assert length_to_rn_unit("0.25rem") == 4
        assert length_to_rn_unit("1.125rem") == 18

    def test_px_is_stripped(self):
        from tokensync.core.coercion import length_to_rn_unit

        assert length_to_rn_unit("24px") == 24
        assert isinstance(length_to_rn_unit("24px"), int)

    def test_percentage_stays_quoted_literal(self):
        from tokensync.core.coercion import length_to_rn_unit

        assert length_to_rn_unit("50%") == "'50%'"

    def test_numbers_pass_through(self):
        from tokensync.core.coercion import length_to_rn_unit

        assert length_to_rn_unit(12) == 12
        assert length_to_rn_unit(1.5) == 1.5

    def test_unparsable_is_zero(self):
        from tokensync.core.coercion import length_to_rn_unit

        assert length_to_rn_unit("auto") == 0
        assert length_to_rn_unit(None) == 0

    def test_unitless_uses_leading_number(self):
        from tokensync.core.coercion import length_to_rn_unit

        assert length_to_rn_unit("1.5") == 1.5
        assert length_to_rn_unit("2em") == 2


class TestReactNativeShadow:
    """CSS box-shadow -> React Native shadow props."""

    def test_parses_offsets_blur_and_elevation(self):
        from tokensync.core.coercion import shadow_to_rn_shadow

        shadow = shadow_to_rn_shadow("0 4px 6px -1px rgba(0,0,0,0.1)")
        assert shadow["shadowOffset"] == {"width": 0, "height": 4}
        assert shadow["shadowRadius"] == 6
        assert shadow["elevation"] == 4
        assert shadow["shadowColor"] == "#000000"
        assert shadow["shadowOpacity"] == 0.1

    def test_elevation_is_absolute_y_offset(self):
        from tokensync.core.coercion import shadow_to_rn_shadow

        shadow = shadow_to_rn_shadow("0 -3px 5px 0 black")
        assert shadow["shadowOffset"]["height"] == -3
        assert shadow["elevation"] == 3

    def test_parse_failures_use_per_field_defaults(self):
        from tokensync.core.coercion import shadow_to_rn_shadow

        shadow = shadow_to_rn_shadow("a b c d")
        assert shadow["shadowOffset"] == {"width": 0, "height": 2}
        assert shadow["shadowRadius"] == 4
        assert shadow["elevation"] == 2

    @pytest.mark.parametrize("value", ["none", "0 1px", "", None, 12])
    def test_short_or_invalid_input_gives_default(self, value):
        from tokensync.core.coercion import DEFAULT_RN_SHADOW, shadow_to_rn_shadow

        assert shadow_to_rn_shadow(value) == DEFAULT_RN_SHADOW

    def test_default_is_not_shared(self):
        from tokensync.core.coercion import DEFAULT_RN_SHADOW, shadow_to_rn_shadow

        shadow = shadow_to_rn_shadow("none")
        shadow["shadowOffset"]["width"] = 99
        assert DEFAULT_RN_SHADOW["shadowOffset"]["width"] == 0


class TestFlutterValues:
    """Dart double literals and color literals."""

    def test_rem_to_one_decimal(self):
        from tokensync.core.coercion import length_to_flutter

        assert length_to_flutter("1rem") == "16.0"
        assert length_to_flutter("0.375rem") == "6.0"

    def test_px_and_numbers(self):
        from tokensync.core.coercion import length_to_flutter

        assert length_to_flutter("24px") == "24.0"
        assert length_to_flutter(8) == "8.0"

    def test_unparsable_defaults(self):
        from tokensync.core.coercion import length_to_flutter

        assert length_to_flutter("auto") == "0.0"
        assert length_to_flutter(None) == "0.0"

    def test_xamarin_uses_same_rule(self):
        from tokensync.core.coercion import length_to_xamarin

        assert length_to_xamarin("2rem") == "32.0"

    def test_hex_color_uppercased(self):
        from tokensync.core.coercion import hex_to_flutter_color

        assert hex_to_flutter_color("#3b82f6") == "Color(0xFF3B82F6)"

    def test_shorthand_hex_is_expanded(self):
        from tokensync.core.coercion import hex_to_flutter_color

        assert hex_to_flutter_color("#fff") == "Color(0xFFFFFFFF)"

    def test_alpha_moves_to_front(self):
        from tokensync.core.coercion import hex_to_flutter_color

        assert hex_to_flutter_color("#3b82f680") == "Color(0x803B82F6)"

    def test_non_hex_falls_back_to_black(self):
        from tokensync.core.coercion import hex_to_flutter_color

        assert hex_to_flutter_color("rgb(0,0,0)") == "Colors.black"
        assert hex_to_flutter_color(None) == "Colors.black"


class TestNames:
    """Identifier and literal helpers."""

    def test_kebab_case(self):
        from tokensync.core.coercion import kebab_case

        assert kebab_case("borderRadius") == "border-radius"
        assert kebab_case("zIndex") == "z-index"

    def test_member_name(self):
        from tokensync.core.coercion import member_name

        assert member_name("primary", "500") == "primary500"
        assert member_name("brand", "light") == "brandLight"
        assert member_name("spacing", "0.5") == "spacing0_5"
        assert member_name("2xl") == "_2xl"

    def test_js_key_quotes_only_when_needed(self):
        from tokensync.core.coercion import js_key

        assert js_key("primary") == "primary"
        assert js_key("500") == "500"
        assert js_key("2xl") == "'2xl'"
        assert js_key("ease-in") == "'ease-in'"

    def test_js_string_escapes_quotes(self):
        from tokensync.core.coercion import js_string

        assert js_string("it's") == "'it\\'s'"

    def test_js_literal(self):
        from tokensync.core.coercion import js_literal

        assert js_literal(None) == "null"
        assert js_literal(True) == "true"
        assert js_literal(False) == "false"
        assert js_literal("Inter") == "'Inter'"
        assert js_literal(600) == "'600'"

    def test_dart_string_escapes_interpolation(self):
        from tokensync.core.coercion import dart_string

        assert dart_string("$font") == "'\\$font'"
        assert dart_string("it's") == "'it\\'s'"

    def test_css_value(self):
        from tokensync.core.coercion import css_value

        assert css_value(16.0) == "16"
        assert css_value(1040) == "1040"
        assert css_value(True) == "true"
