"""
Unit tests for Postgres array literal handling
"""
import pytest

from estate_enquiry.utils.pg_array import coerce_string_list, encode_pg_array, parse_pg_array


class TestEncode:

    def test_quotes_every_value(self):
        assert encode_pg_array(["2BHK", "3BHK"]) == '{"2BHK","3BHK"}'

    def test_empty(self):
        assert encode_pg_array([]) == "{}"

    def test_blank_values_dropped(self):
        assert encode_pg_array(["siteVisit", "  "]) == '{"siteVisit"}'

    def test_escapes_quotes_and_backslashes(self):
        assert encode_pg_array(['say "hi"', "a\\b"]) == '{"say \\"hi\\"","a\\\\b"}'


class TestParse:

    def test_quoted(self):
        assert parse_pg_array('{"siteVisit","videoChat"}') == ["siteVisit", "videoChat"]

    def test_unquoted(self):
        assert parse_pg_array("{2BHK, 3BHK}") == ["2BHK", "3BHK"]

    def test_empty(self):
        assert parse_pg_array("{}") == []

    def test_comma_inside_quotes(self):
        assert parse_pg_array('{"Whitefield, Bengaluru"}') == ["Whitefield, Bengaluru"]

    def test_escaped_quote(self):
        assert parse_pg_array('{"say \\"hi\\""}') == ['say "hi"']

    @pytest.mark.parametrize("literal", ["2BHK,3BHK", '["2BHK"]', '{"2BHK}'])
    def test_rejects_malformed(self, literal):
        with pytest.raises(ValueError):
            parse_pg_array(literal)

    def test_decodes_what_encode_produces(self):
        values = ["2BHK", 'Tower "A"', "East, Wing"]
        assert parse_pg_array(encode_pg_array(values)) == values


class TestCoerce:

    @pytest.mark.parametrize("value, expected", [
        (None, None),
        ("", []),
        ('{"2BHK","3BHK"}', ["2BHK", "3BHK"]),
        ("2BHK, 3BHK", ["2BHK", "3BHK"]),
        (["siteVisit", " videoChat "], ["siteVisit", "videoChat"]),
        ([], []),
    ])
    def test_accepted_shapes(self, value, expected):
        assert coerce_string_list(value) == expected
