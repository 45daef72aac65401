"""Tests for wct_xunit/utils/xmltags.py: escaping and tag construction."""

import xml.etree.ElementTree as ET

import pytest

from wct_xunit.utils.xmltags import cdata, escape, tag


class TestEscape:
    def test_entities(self):
        assert escape('a & b < c > d "e"') == "a &amp; b &lt; c &gt; d &quot;e&quot;"

    def test_non_strings(self):
        assert escape(3) == "3"
        assert escape(0.5) == "0.5"
        assert escape(None) == ""

    def test_illegal_control_characters_are_replaced(self):
        assert escape("a\x00b\x1bc") == "a\ufffdb\ufffdc"

    def test_whitespace_controls_survive(self):
        assert escape("a\tb\nc") == "a\tb\nc"

    def test_lone_surrogates_are_replaced(self):
        assert escape("x\ud800y\udfff") == "x\ufffdy\ufffd"
        assert escape("\udc80").encode("utf-8") == "\ufffd".encode("utf-8")

    def test_astral_characters_survive(self):
        value = "emoji \U0001f600 & more"
        element = ET.fromstring(tag("t", {"v": value}, True).encode("utf-8"))
        assert element.get("v") == value

    @pytest.mark.parametrize("value", [
        "a & b",
        "<script>",
        '"quoted"',
        'x > y & "z" < w',
        "&amp; already escaped",
        "plain",
    ])
    def test_attribute_round_trip(self, value):
        element = ET.fromstring(tag("t", {"v": value}, True))
        assert element.get("v") == value


class TestTag:
    def test_self_closing(self):
        assert tag("testcase", {"name": "x", "time": 1}, True) == '<testcase name="x" time="1"/>'

    def test_no_attributes(self):
        assert tag("failure", {}, True) == "<failure/>"

    def test_open_tag_only_without_content(self):
        assert tag("testsuite", {"name": "s"}) == '<testsuite name="s">'

    def test_content_is_embedded_verbatim(self):
        assert tag("a", {}, False, "<b/>") == "<a><b/></a>"

    def test_empty_content_closes(self):
        assert tag("a", {}, False, "") == "<a></a>"

    def test_self_closing_rejects_content(self):
        with pytest.raises(ValueError):
            tag("a", {}, True, "<b/>")


class TestCdata:
    def test_wraps_escaped_text(self):
        assert cdata("1 < 2") == "<![CDATA[1 &lt; 2]]>"

    def test_terminator_cannot_break_out(self):
        element = ET.fromstring(tag("f", {}, False, cdata("oops ]]> <x/>")))
        assert element.text == "oops ]]&gt; &lt;x/&gt;"
        assert list(element) == []
