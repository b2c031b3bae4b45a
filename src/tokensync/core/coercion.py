"""
Value coercion helpers shared by the platform generators.

Each helper converts a single CSS-flavoured token value into the literal a
target platform expects: rem/px lengths into density-independent numbers,
box-shadow shorthands into shadow structs, hex colors into color literals.
"""

from __future__ import annotations

import copy
import math
import re
from typing import Any

from .ir.tokens import TokenValue

# Browser default root font size used for rem conversion
REM_BASE_PX = 16

DEFAULT_RN_SHADOW: dict[str, Any] = {
    "shadowColor": "#000000",
    "shadowOffset": {"width": 0, "height": 2},
    "shadowOpacity": 0.1,
    "shadowRadius": 4,
    "elevation": 2,
}

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_JS_INDEX = re.compile(r"^(?:0|[1-9]\d*)$")
_MEMBER_INVALID = re.compile(r"[^A-Za-z0-9_]")


def parse_float(value: Any) -> float | None:
    """Parse the leading number of a value, like JavaScript's ``parseFloat``.

    ``"1.5rem"`` -> 1.5, ``"-1px"`` -> -1.0, ``"abc"`` -> None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None
    match = _LEADING_NUMBER.match(value)
    return float(match.group(1)) if match else None


def _compact(number: float) -> int | float:
    """Return an int when the float has no fractional part."""
    if math.isfinite(number) and number == int(number):
        return int(number)
    return number


def length_to_rn_unit(value: TokenValue) -> int | float | str:
    """Convert a CSS length to a React Native value.

    rem is multiplied by 16, px is stripped, percentages stay a quoted
    string literal, anything unparsable becomes 0.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return 0

    text = value.strip()
    if text.endswith("%"):
        return f"'{text}'"

    number = parse_float(text)
    if number is None:
        return 0
    if text.endswith("rem"):
        return _compact(number * REM_BASE_PX)
    return _compact(number)


def shadow_to_rn_shadow(value: TokenValue) -> dict[str, Any]:
    """Convert a CSS box-shadow shorthand into React Native shadow props.

    ``"0 4px 6px -1px rgba(0,0,0,0.1)"`` gives offset (0, 4), radius 6 and
    Android elevation 4. Shorthands with fewer than four parts fall back to
    :data:`DEFAULT_RN_SHADOW`.
    """
    if not isinstance(value, str) or not value.strip():
        return copy.deepcopy(DEFAULT_RN_SHADOW)

    parts = value.split()
    if len(parts) < 4:
        return copy.deepcopy(DEFAULT_RN_SHADOW)

    x = parse_float(parts[0])
    y = parse_float(parts[1])
    blur = parse_float(parts[2])

    width = _compact(x) if x is not None else 0
    height = _compact(y) if y is not None else 2
    radius = _compact(blur) if blur is not None else 4

    return {
        "shadowColor": "#000000",
        "shadowOffset": {"width": width, "height": height},
        "shadowOpacity": 0.1,
        "shadowRadius": radius,
        "elevation": abs(height),
    }


def length_to_flutter(value: TokenValue) -> str:
    """Convert a CSS length to a Dart double literal with one decimal ("16.0")."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{float(value):.1f}"
    if not isinstance(value, str):
        return "0.0"

    number = parse_float(value)
    if number is None:
        return "0.0"
    if value.strip().endswith("rem"):
        number *= REM_BASE_PX
    return f"{number:.1f}"


# Xamarin uses the same double-literal rule as Flutter
length_to_xamarin = length_to_flutter


def _expand_hex(digits: str) -> str:
    if len(digits) in (3, 4):
        return "".join(ch * 2 for ch in digits)
    return digits


def hex_to_flutter_color(value: TokenValue) -> str:
    """Convert ``#rrggbb`` to ``Color(0xFFRRGGBB)``.

    Shorthand ``#rgb`` is expanded and ``#rrggbbaa`` moves its alpha to the
    front. Non-hex input gives ``Colors.black``.
    """
    if not is_hex_color(value):
        return "Colors.black"

    digits = _expand_hex(str(value)[1:]).upper()
    if len(digits) == 8:
        return f"Color(0x{digits[6:]}{digits[:6]})"
    return f"Color(0xFF{digits})"


def is_hex_color(value: TokenValue) -> bool:
    """True for values the native color literals accept (``#``-prefixed strings)."""
    return isinstance(value, str) and value.startswith("#")


def is_reference(value: TokenValue) -> bool:
    """True for an unresolved ``{a.b.c}`` token reference."""
    return isinstance(value, str) and value.startswith("{") and value.endswith("}")


# =============================================================================
# Names and literals
# =============================================================================


def capitalize(text: str) -> str:
    """Uppercase the first character only (``"ease-in"`` -> ``"Ease-in"``)."""
    return text[:1].upper() + text[1:]


def kebab_case(text: str) -> str:
    """``"borderRadius"`` -> ``"border-radius"``."""
    return re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", text).lower()


def member_name(*parts: str) -> str:
    """Join parts into a camelCase member name valid in Dart, Swift and C#.

    The first part is kept as-is and later parts are capitalized; characters
    outside ``[A-Za-z0-9_]`` become ``_`` and a leading digit gets a ``_``
    prefix (``("primary", "500")`` -> ``"primary500"``).
    """
    name = parts[0] + "".join(capitalize(part) for part in parts[1:]) if parts else ""
    name = _MEMBER_INVALID.sub("_", name)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name


def js_key(key: str) -> str:
    """Render an object key, quoting it unless it is an identifier or an index."""
    if _JS_IDENTIFIER.match(key) or _JS_INDEX.match(key):
        return key
    return js_string(key)


def js_string(value: Any) -> str:
    """Render a single-quoted JavaScript string literal."""
    text = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{text}'"


def js_literal(value: TokenValue) -> str:
    """Render a token value as a JavaScript literal.

    ``None`` and booleans become ``null``/``true``/``false``; everything else
    is a quoted string.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return js_string(value)


def dart_string(value: Any) -> str:
    """Render a single-quoted Dart string literal (``$`` is escaped)."""
    return js_string(value).replace("$", "\\$")


def js_number(value: int | float) -> str:
    """Render a number the way JavaScript prints it (16.0 -> 16)."""
    if isinstance(value, float) and math.isfinite(value) and value == int(value):
        return str(int(value))
    return str(value)


def css_value(value: TokenValue) -> str:
    """Render a token value inside CSS/SCSS declarations."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return js_number(value)
    if value is None:
        return ""
    return str(value)
