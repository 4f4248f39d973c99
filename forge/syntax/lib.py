"""Literal encoders and naming helpers for generated source code.

Every user-supplied string that reaches generated code passes through one
of the encoders below. Each encoder returns a complete literal (quotes
included) or, for the XML helpers, the text to place between attribute
quotes.
"""

import json
import re

# =============================================================================
# String literal encoders
# =============================================================================


def js_string(value: str) -> str:
    """Encode a JavaScript/TypeScript string literal.

    JSON string syntax is a subset of JS; `</` and the line/paragraph
    separators are escaped so the literal is safe inside HTML and in
    engines that predate ES2019.
    """
    encoded = json.dumps(value, ensure_ascii=False)
    return (
        encoded.replace("</", "<\\/")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


_SWIFT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def swift_string(value: str) -> str:
    """Encode a Swift string literal.

    Backslashes are doubled, which also neutralises `\\(` interpolation.
    Remaining control characters use the `\\u{..}` form.
    """
    out: list[str] = []
    for ch in value:
        if ch in _SWIFT_ESCAPES:
            out.append(_SWIFT_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F or ch in "\u2028\u2029":
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


_KOTLIN_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "$": "\\$",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
}


def kotlin_string(value: str) -> str:
    """Encode a Kotlin string literal.

    `$` is escaped so templates (`$x`, `${x}`) never interpolate.
    """
    out: list[str] = []
    for ch in value:
        if ch in _KOTLIN_ESCAPES:
            out.append(_KOTLIN_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F or ch in "\u2028\u2029":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


# Characters not allowed anywhere in an XML 1.0 document
_XML_INVALID = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def xml_text(value: str) -> str:
    """Escape text for an XML element body."""
    value = _XML_INVALID.sub("\ufffd", value)
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def xml_attr(value: str) -> str:
    """Escape text for a double- or single-quoted XML attribute value.

    Whitespace controls are written as character references so parsers
    do not normalise them away.
    """
    return (
        xml_text(value)
        .replace('"', "&quot;")
        .replace("'", "&apos;")
        .replace("\n", "&#10;")
        .replace("\r", "&#13;")
        .replace("\t", "&#9;")
    )


def android_text(value: str) -> str:
    """Escape a string for an Android resource attribute value.

    Applies the resource compiler's escaping (backslash, quotes, newline,
    leading `@`/`?` reference markers), then XML attribute escaping.
    """
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    if escaped[:1] in ("@", "?"):
        escaped = "\\" + escaped
    return xml_attr(escaped)


def json_value(value) -> str:
    """Encode a JSON-like value as a compact, deterministic JSON literal."""
    return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


# =============================================================================
# Naming
# =============================================================================

_WORD_BOUNDARY = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])|[0-9]+")

SWIFT_KEYWORDS = frozenset(
    "associatedtype class deinit enum extension func import init inout internal "
    "let operator private protocol public static struct subscript typealias var "
    "break case continue default defer do else fallthrough for guard if in "
    "repeat return switch where while as catch false is nil rethrows super "
    "self Self throw throws true try Any Type".split()
)

KOTLIN_KEYWORDS = frozenset(
    "as break class continue do else false for fun if in interface is null "
    "object package return super this throw true try typealias typeof val var "
    "when while".split()
)

JS_RESERVED = frozenset(
    "break case catch class const continue debugger default delete do else enum "
    "export extends false finally for function if import in instanceof new null "
    "return super switch this throw true try typeof var void while with yield "
    "let static implements interface package private protected public await".split()
)


def split_words(name: str) -> list[str]:
    """Split camelCase, PascalCase, snake_case, kebab-case or free text."""
    return [w.lower() for w in _WORD_BOUNDARY.findall(name)]


def to_pascal(name: str) -> str:
    """Convert to PascalCase.

    Example:
        >>> to_pascal("text-input")
        'TextInput'
    """
    return "".join(w[:1].upper() + w[1:] for w in split_words(name))


def to_camel(name: str) -> str:
    """Convert to camelCase."""
    pascal = to_pascal(name)
    return pascal[:1].lower() + pascal[1:]


def to_snake(name: str) -> str:
    """Convert to snake_case."""
    return "_".join(split_words(name))


def to_kebab(name: str) -> str:
    """Convert to kebab-case."""
    return "-".join(split_words(name))


def to_identifier(name: str, keywords: frozenset[str] = frozenset(), pascal: bool = False) -> str:
    """Convert arbitrary text to a safe identifier.

    Leading digits get an underscore prefix and reserved words a trailing
    underscore. Empty input yields "value".
    """
    ident = to_pascal(name) if pascal else to_camel(name)
    if not ident:
        ident = "Value" if pascal else "value"
    if ident[0].isdigit():
        ident = "_" + ident
    if ident in keywords:
        ident += "_"
    return ident


def to_app_name(name: str) -> str:
    """Derive a PascalCase application name (e.g. "my todo app" -> "MyTodoApp")."""
    ident = to_pascal(name)
    if not ident or ident[0].isdigit():
        ident = "App" + ident
    return ident


# =============================================================================
# Formatting
# =============================================================================


def format_number(value: float) -> str:
    """Format a number without a trailing `.0` and with at most 3 decimals.

    Example:
        >>> format_number(14.0), format_number(3.5), format_number(1 / 3)
        ('14', '3.5', '0.333')
    """
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def indent(text: str, levels: int = 1, unit: str = "    ") -> str:
    """Indent every non-empty line of text."""
    prefix = unit * levels
    return "\n".join(prefix + line if line.strip() else line for line in text.split("\n"))


__all__ = [
    # Encoders
    "js_string",
    "swift_string",
    "kotlin_string",
    "xml_text",
    "xml_attr",
    "android_text",
    "json_value",
    # Naming
    "SWIFT_KEYWORDS",
    "KOTLIN_KEYWORDS",
    "JS_RESERVED",
    "split_words",
    "to_pascal",
    "to_camel",
    "to_snake",
    "to_kebab",
    "to_identifier",
    "to_app_name",
    # Formatting
    "format_number",
    "indent",
]
