"""
Mobile targets: React Native, Expo, Flutter, iOS, Android, Xamarin.

Values go through the platform coercions in :mod:`tokensync.core.coercion`.
Native color outputs (Flutter, iOS, Android, Xamarin) only carry ``#`` hex
colors; other color syntaxes are skipped because the target literal cannot
express them.
"""

from __future__ import annotations

import html
import json
import re

from ..coercion import (
    capitalize,
    css_value,
    dart_string,
    hex_to_flutter_color,
    is_hex_color,
    js_key,
    js_literal,
    js_number,
    js_string,
    length_to_flutter,
    length_to_rn_unit,
    length_to_xamarin,
    member_name,
    shadow_to_rn_shadow,
)
from ..ir.tokens import CanonicalTokenSet, TokenMap, TokenValue
from ..validator import is_numeric_shade
from .base import (
    HEADER_NOTICE,
    HEADER_TITLE,
    Lines,
    Section,
    TargetDescriptor,
    block,
    color_entries,
    comment_header,
    entries,
    has,
)

_ANDROID_NAME_INVALID = re.compile(r"[^A-Za-z0-9_]")


def _rn_number(value: TokenValue) -> str:
    converted = length_to_rn_unit(value)
    if isinstance(converted, str):
        return converted
    return js_number(converted)


def _swift_string(value: TokenValue) -> str:
    return json.dumps(css_value(value), ensure_ascii=False)


# =============================================================================
# React Native
# =============================================================================


def _rn_colors(tokens: CanonicalTokenSet) -> Lines:
    if not tokens.colors:
        return ["export const colors = {};", ""]
    body: Lines = []
    for family, shades in tokens.colors.items():
        body.append(f"  {js_key(family)}: {{")
        body.extend(entries(shades, lambda k, v: f"    {js_key(k)}: {js_literal(v)},"))
        body.append("  },")
    return block("export const colors = {", body, "};")


def _rn_typography(tokens: CanonicalTokenSet) -> Lines:
    typography = tokens.typography
    groups = (
        ("fontFamily", typography.font_family, js_literal),
        ("fontSize", typography.font_size, _rn_number),
        ("fontWeight", typography.font_weight, js_literal),
    )
    body: Lines = []
    for name, values, fmt in groups:
        if values:
            body.append(f"  {name}: {{")
            body.extend(entries(values, lambda k, v, f=fmt: f"    {js_key(k)}: {f(v)},"))
            body.append("  },")
    return block("export const typography = {", body, "};")


def _rn_lengths(name: str, values: TokenMap) -> Lines:
    body = entries(values, lambda k, v: f"  {js_key(k)}: {_rn_number(v)},")
    return block(f"export const {name} = {{", body, "};")


def _rn_shadows(tokens: CanonicalTokenSet) -> Lines:
    body = entries(
        tokens.shadows,
        lambda k, v: f"  {js_key(k)}: {json.dumps(shadow_to_rn_shadow(v), separators=(',', ':'))},",
    )
    return block("export const shadows = {", body, "};")


def _rn_footer(tokens: CanonicalTokenSet) -> Lines:
    card = ["    backgroundColor: colors.neutral?.[50] || '#ffffff',"]
    card.append(
        "    borderRadius: borderRadius?.md || 8," if tokens.border_radius else "    borderRadius: 8,"
    )
    card.append("    padding: spacing?.[4] || 16," if tokens.spacing else "    padding: 16,")
    if tokens.shadows:
        card.append("    ...shadows?.md || {},")

    exported = ["  colors,"]
    for name, present in (
        ("spacing", bool(tokens.spacing)),
        ("typography", not tokens.typography.is_empty()),
        ("borderRadius", bool(tokens.border_radius)),
        ("shadows", bool(tokens.shadows)),
    ):
        if present:
            exported.append(f"  {name},")
    exported.append("  styles,")

    return [
        "export const styles = StyleSheet.create({",
        "  container: {",
        "    flex: 1,",
        "  },",
        "  card: {",
        *card,
        "  },",
        "});",
        "",
        *block("export default {", exported, "};", blank_after=False),
    ]


REACT_NATIVE = TargetDescriptor(
    name="react_native",
    label="React Native",
    default_path="src/tokens/tokens.js",
    header=(
        *comment_header("//", "for React Native"),
        "",
        "import { StyleSheet, Dimensions } from 'react-native';",
        "",
        "const { width: screenWidth, height: screenHeight } = Dimensions.get('window');",
        "",
    ),
    sections=(
        Section(_rn_colors),
        Section(lambda t: _rn_lengths("spacing", t.spacing), when=has(lambda t: t.spacing)),
        Section(_rn_typography, when=has(lambda t: t.typography)),
        Section(
            lambda t: _rn_lengths("borderRadius", t.border_radius),
            when=has(lambda t: t.border_radius),
        ),
        Section(_rn_shadows, when=has(lambda t: t.shadows)),
    ),
    footer=_rn_footer,
    aliases=("reactNative",),
)


# =============================================================================
# Expo
# =============================================================================


def _expo_theme(tokens: CanonicalTokenSet) -> Lines:
    light: Lines = []
    if tokens.colors:
        light = block(
            "    colors: {",
            color_entries(
                tokens,
                lambda f, s, v: f"      {js_key(f + capitalize(s))}: {js_literal(v)},",
            ),
            "    },",
            blank_after=False,
        )
    return [
        "export const theme = {",
        "  light: {",
        *light,
        "  },",
        "  dark: {",
        "    // Dark theme variants (customize as needed)",
        "    colors: {",
        "      // Add dark mode colors here",
        "    },",
        "  },",
        "};",
        "",
    ]


def _expo_native_wind(tokens: CanonicalTokenSet) -> Lines:
    body = color_entries(tokens, lambda f, s, v: f"  {js_string(f'{f}-{s}')}: {js_literal(v)},")
    return [
        "// NativeWind/Tailwind compatible color utilities",
        *block("export const nativeWindColors = {", body, "};"),
    ]


EXPO = TargetDescriptor(
    name="expo",
    label="Expo tokens",
    default_path="src/tokens/expo-tokens.js",
    header=(
        *comment_header("//", "for Expo", "Compatible with Expo Router and NativeWind"),
        "",
        "import { StyleSheet } from 'react-native';",
        "",
    ),
    sections=(Section(_expo_theme), Section(_expo_native_wind)),
    footer=lambda t: [
        "// Use with Expo Constants for dynamic theming",
        "export const getThemeColors = (colorScheme = 'light') => {",
        "  return theme[colorScheme]?.colors || theme.light.colors;",
        "};",
    ],
)


# =============================================================================
# Flutter
# =============================================================================


def _flutter_colors(tokens: CanonicalTokenSet) -> Lines:
    body: Lines = []
    for family, shades in tokens.colors.items():
        body.append(f"  // {capitalize(family)} colors")
        for shade, value in shades.items():
            if is_hex_color(value):
                body.append(
                    f"  static const Color {member_name(family, shade)} = "
                    f"{hex_to_flutter_color(value)};"
                )
        body.append("")
    return block("class AppColors {", body, "}")


def _flutter_spacing(tokens: CanonicalTokenSet) -> Lines:
    body = entries(
        tokens.spacing,
        lambda k, v: f"  static const double {member_name('spacing', k)} = {length_to_flutter(v)};",
    )
    return block("class AppSpacing {", body, "}")


def _flutter_text_styles(tokens: CanonicalTokenSet) -> Lines:
    default_font = tokens.typography.font_family.get("sans") or "Roboto"
    body = [f"  static const String defaultFontFamily = {dart_string(default_font)};", ""]
    for key, value in tokens.typography.font_size.items():
        if value is None:
            continue
        body.extend(
            [
                f"  static const TextStyle {member_name(key)} = TextStyle(",
                f"    fontSize: {length_to_flutter(value)},",
                "    fontFamily: defaultFontFamily,",
                "  );",
                "",
            ]
        )
    return block("class AppTextStyles {", body, "}")


def _flutter_swatch(primary: TokenMap) -> Lines:
    base = hex_to_flutter_color(primary.get("500"))
    base_literal = base[len("Color(") : -1] if base.startswith("Color(") else "0xFF000000"
    shades = [
        f"        {shade}: AppColors.{member_name('primary', shade)},"
        for shade, value in primary.items()
        if is_numeric_shade(shade) and is_hex_color(value)
    ]
    return [f"      primarySwatch: MaterialColor({base_literal}, {{", *shades, "      }),"]


def _flutter_theme(tokens: CanonicalTokenSet) -> Lines:
    body = ["      useMaterial3: true,"]
    primary = tokens.colors.get("primary")
    if primary:
        body.extend(_flutter_swatch(primary))
    if not tokens.typography.is_empty():
        body.append("      fontFamily: AppTextStyles.defaultFontFamily,")
    return [
        "class AppTheme {",
        "  static ThemeData get lightTheme {",
        "    return ThemeData(",
        *body,
        "    );",
        "  }",
        "}",
    ]


FLUTTER = TargetDescriptor(
    name="flutter",
    label="Flutter Dart",
    default_path="lib/tokens/design_tokens.dart",
    header=(
        *comment_header("//", "for Flutter"),
        "",
        "import 'package:flutter/material.dart';",
        "",
    ),
    sections=(
        Section(_flutter_colors, when=has(lambda t: t.colors)),
        Section(_flutter_spacing, when=has(lambda t: t.spacing)),
        Section(_flutter_text_styles, when=has(lambda t: t.typography)),
    ),
    footer=_flutter_theme,
)


# =============================================================================
# iOS
# =============================================================================


def _swift_color(family: str, shade: str, value: TokenValue) -> str | None:
    if not is_hex_color(value):
        return None
    return f"    static let {member_name(family, shade)} = UIColor(hex: {_swift_string(value)})"


IOS = TargetDescriptor(
    name="ios",
    label="iOS Swift",
    default_path="ios/DesignTokens.swift",
    header=(
        *comment_header("//", "Swift Colors"),
        "import UIKit",
        "",
        "extension UIColor {",
    ),
    sections=(Section(lambda t: color_entries(t, _swift_color)),),
    footer=lambda t: ["}"],
)


# =============================================================================
# Android
# =============================================================================


def _android_color(family: str, shade: str, value: TokenValue) -> str | None:
    if not is_hex_color(value):
        return None
    name = _ANDROID_NAME_INVALID.sub("_", f"{family}_{shade}")
    return f'    <color name="{name}">{html.escape(str(value))}</color>'


ANDROID = TargetDescriptor(
    name="android",
    label="Android XML",
    default_path="android/app/src/main/res/values/colors.xml",
    header=(
        '<?xml version="1.0" encoding="utf-8"?>',
        f"<!-- {HEADER_TITLE} Android Colors -->",
        f"<!-- {HEADER_NOTICE} -->",
        "<resources>",
    ),
    sections=(Section(lambda t: color_entries(t, _android_color)),),
    footer=lambda t: ["</resources>"],
)


# =============================================================================
# Xamarin
# =============================================================================


def _xamarin_colors(tokens: CanonicalTokenSet) -> Lines:
    body: Lines = []
    for family, shades in tokens.colors.items():
        body.append(f"    // {capitalize(family)} colors")
        for shade, value in shades.items():
            if is_hex_color(value):
                body.append(
                    f"    public static Color {member_name(capitalize(family), shade)} => "
                    f"Color.FromHex({_swift_string(value)});"
                )
        body.append("")
    return ["public static class AppColors", *block("{", body, "}")]


def _xamarin_spacing(tokens: CanonicalTokenSet) -> Lines:
    body = entries(
        tokens.spacing,
        lambda k, v: f"    public static double {member_name('Spacing', k)} => {length_to_xamarin(v)};",
    )
    return ["public static class AppSpacing", *block("{", body, "}")]


def _xamarin_fonts(tokens: CanonicalTokenSet) -> Lines:
    typography = tokens.typography
    body = entries(
        typography.font_family,
        lambda k, v: (
            f"    public static string {member_name(capitalize(k), 'FontFamily')} => "
            f"{_swift_string(v)};"
        ),
    )
    body.append("")
    body.extend(
        entries(
            typography.font_size,
            lambda k, v: (
                f"    public static double {member_name('FontSize', k)} => {length_to_xamarin(v)};"
            ),
        )
    )
    return ["public static class AppFonts", *block("{", body, "}", blank_after=False)]


XAMARIN = TargetDescriptor(
    name="xamarin",
    label="Xamarin C#",
    default_path="Xamarin/DesignTokens.cs",
    header=(*comment_header("//", "for Xamarin"), "", "using Xamarin.Forms;", ""),
    sections=(
        Section(_xamarin_colors, when=has(lambda t: t.colors)),
        Section(_xamarin_spacing, when=has(lambda t: t.spacing)),
        Section(_xamarin_fonts, when=has(lambda t: t.typography)),
    ),
)

MOBILE_TARGETS: tuple[TargetDescriptor, ...] = (
    REACT_NATIVE,
    EXPO,
    FLUTTER,
    IOS,
    ANDROID,
    XAMARIN,
)
