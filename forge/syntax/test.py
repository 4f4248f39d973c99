"""Unit tests for literal encoders and naming helpers."""

import json
import xml.etree.ElementTree as ET

import pytest

from forge.syntax import (
    KOTLIN_KEYWORDS,
    android_text,
    format_number,
    indent,
    js_string,
    kotlin_string,
    swift_string,
    to_app_name,
    to_camel,
    to_identifier,
    to_kebab,
    to_pascal,
    to_snake,
    xml_attr,
)

HOSTILE = 'He said "hi" \\ `x` ${y} $z \\(name) </script>\n\ttab'


class TestJsString:
    """Tests for JS string literals."""

    @pytest.mark.unit
    def test_is_valid_json(self):
        """The literal decodes back to the original text."""
        assert json.loads(js_string(HOSTILE)) == HOSTILE

    @pytest.mark.unit
    def test_escapes_script_close(self):
        """</ never appears verbatim."""
        assert "</" not in js_string("</script>")

    @pytest.mark.unit
    def test_escapes_line_separators(self):
        """U+2028 and U+2029 are written as escapes."""
        literal = js_string("a\u2028b\u2029c")
        assert "\u2028" not in literal
        assert "\\u2028" in literal and "\\u2029" in literal


class TestSwiftString:
    """Tests for Swift string literals."""

    @pytest.mark.unit
    def test_quotes_and_backslashes(self):
        """Quotes and backslashes are escaped."""
        assert swift_string('a"b\\c') == '"a\\"b\\\\c"'

    @pytest.mark.unit
    def test_interpolation_neutralised(self):
        """\\( becomes an escaped backslash followed by a paren."""
        assert swift_string("\\(x)") == '"\\\\(x)"'

    @pytest.mark.unit
    def test_control_characters(self):
        """Newlines use short escapes; other controls use \\u{..}."""
        assert swift_string("a\nb") == '"a\\nb"'
        assert swift_string("\x01") == '"\\u{1}"'


class TestKotlinString:
    """Tests for Kotlin string literals."""

    @pytest.mark.unit
    def test_dollar_escaped(self):
        """String templates never interpolate."""
        assert kotlin_string("${x} $y") == '"\\${x} \\$y"'

    @pytest.mark.unit
    def test_quotes_and_controls(self):
        """Quotes, backslashes and control characters are escaped."""
        assert kotlin_string('"\\\n\x00') == '"\\"\\\\\\n\\u0000"'

    @pytest.mark.unit
    def test_no_raw_newlines(self):
        """Literals always fit on one line."""
        assert "\n" not in kotlin_string(HOSTILE)


class TestXml:
    """Tests for XML and Android resource escaping."""

    @pytest.mark.unit
    def test_attribute_round_trips_through_parser(self):
        """Escaped attribute values parse back to the original text."""
        value = "<a> & \"b\" 'c'\nnext"
        element = ET.fromstring(f'<node value="{xml_attr(value)}"/>')
        assert element.get("value") == value

    @pytest.mark.unit
    def test_invalid_xml_characters_replaced(self):
        """Characters illegal in XML 1.0 are replaced."""
        escaped = xml_attr("a\x01b")
        element = ET.fromstring(f'<node value="{escaped}"/>')
        assert element.get("value") == "a\ufffdb"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("It's", "It\\'s"),
            ('say "x"', 'say \\"x\\"'),
            ("back\\slash", "back\\\\slash"),
            ("@string/app_name", "\\@string/app_name"),
            ("?attr/color", "\\?attr/color"),
            ("mid @ sign", "mid @ sign"),
        ],
    )
    def test_android_resource_escaping(self, value, expected):
        """Resource compiler escapes are applied before XML escaping."""
        element = ET.fromstring(f'<node value="{android_text(value)}"/>')
        assert element.get("value") == expected


class TestNaming:
    """Tests for identifier helpers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("name", "pascal", "camel", "snake", "kebab"),
        [
            ("text-input", "TextInput", "textInput", "text_input", "text-input"),
            ("fullWidth", "FullWidth", "fullWidth", "full_width", "full-width"),
            ("HTTPServer", "HttpServer", "httpServer", "http_server", "http-server"),
            ("Sign In!", "SignIn", "signIn", "sign_in", "sign-in"),
        ],
    )
    def test_case_conversions(self, name, pascal, camel, snake, kebab):
        """Names convert between conventions."""
        assert to_pascal(name) == pascal
        assert to_camel(name) == camel
        assert to_snake(name) == snake
        assert to_kebab(name) == kebab

    @pytest.mark.unit
    def test_identifier_guards(self):
        """Keywords and leading digits are made safe."""
        assert to_identifier("when", KOTLIN_KEYWORDS) == "when_"
        assert to_identifier("3d") == "_3d"
        assert to_identifier("!!!") == "value"

    @pytest.mark.unit
    def test_app_name(self):
        """App names are PascalCase and never start with a digit."""
        assert to_app_name("my todo app") == "MyTodoApp"
        assert to_app_name("2048") == "App2048"
        assert to_app_name("") == "App"


class TestFormatting:
    """Tests for number and indent formatting."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(16, "16"), (14.0, "14"), (3.5, "3.5"), (1 / 3, "0.333"), (9999, "9999")],
    )
    def test_format_number(self, value, expected):
        """Numbers drop trailing zeros."""
        assert format_number(value) == expected

    @pytest.mark.unit
    def test_indent_skips_blank_lines(self):
        """Blank lines stay empty."""
        assert indent("a\n\nb", 1, "  ") == "  a\n\n  b"
