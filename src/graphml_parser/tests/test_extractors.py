"""Tests for the key resolver and element extractors."""

import pytest
from defusedxml.ElementTree import fromstring

from graphml_parser import AttributeKeyTable, EdgeExtractor, XmlUtils, resolve_keys


class TestKeyResolver:

    def test_empty_document_yields_empty_table(self):
        table = resolve_keys(fromstring("<graphml><graph/></graphml>"))
        assert len(table) == 0
        assert table.resolve("d0") == "d0"

    def test_display_name_preference(self):
        root = fromstring("""<graphml xmlns="http://graphml.graphdrawing.org/xmlns">
            <key id="a" attr.name="weight" attrname="ignored"/>
            <key id="b" attrname="colour"/>
            <key id="c"/>
            <key attr.name="no id"/>
        </graphml>""")
        table = resolve_keys(root)

        assert dict(table.entries) == {"a": "weight", "b": "colour", "c": "c"}
        assert "a" in table
        assert "no id" not in table

    def test_later_declaration_replaces_earlier(self):
        root = fromstring('<graphml><key id="k" attr.name="first"/><key id="k" attr.name="second"/></graphml>')
        assert resolve_keys(root).resolve("k") == "second"

    def test_table_is_read_only(self):
        table = AttributeKeyTable({"k": "name"})
        with pytest.raises(TypeError):
            table.entries["k"] = "other"
        assert table.resolve("k") == "name"


class TestEdgeDirectedness:

    def test_flag_wins_over_default(self):
        assert EdgeExtractor.resolve_directed("true", False) is True
        assert EdgeExtractor.resolve_directed("false", True) is False
        assert EdgeExtractor.resolve_directed(" TRUE ", False) is True

    def test_absent_flag_inherits_default(self):
        assert EdgeExtractor.resolve_directed(None, True) is True
        assert EdgeExtractor.resolve_directed(None, False) is False


class TestXmlUtils:

    def test_local_names(self):
        assert XmlUtils.get_local_name("{http://graphml.graphdrawing.org/xmlns}node") == "node"
        assert XmlUtils.get_local_name("edge") == "edge"

    def test_text_content_includes_descendants(self):
        elem = fromstring("<data>a<b>b</b>c</data>")
        assert XmlUtils.text_content(elem) == "abc"

    def test_children_local_is_shallow(self):
        root = fromstring("<node><data key='x'/><graph><node><data key='y'/></node></graph></node>")
        assert [d.get("key") for d in XmlUtils.children_local(root, "data")] == ["x"]
        assert [d.get("key") for d in XmlUtils.iter_local(root, "data")] == ["x", "y"]
