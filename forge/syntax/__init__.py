"""Literal encoders, naming and formatting helpers for generated code."""

from .lib import (
    JS_RESERVED,
    KOTLIN_KEYWORDS,
    SWIFT_KEYWORDS,
    android_text,
    format_number,
    indent,
    js_string,
    json_value,
    kotlin_string,
    split_words,
    swift_string,
    to_app_name,
    to_camel,
    to_identifier,
    to_kebab,
    to_pascal,
    to_snake,
    xml_attr,
    xml_text,
)

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
