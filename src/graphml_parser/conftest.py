"""Pytest configuration and fixtures for GraphML parser tests."""

import pytest

from graphml_parser import GraphmlParser


@pytest.fixture
def parser():
    """Basic parser fixture."""
    return GraphmlParser()


@pytest.fixture
def flat_parser():
    """Parser that only reads direct children of the top-level graph."""
    return GraphmlParser({'nested_graphs': False})


@pytest.fixture
def minimal_graphml():
    """Two nodes and one edge under a directed default."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<graphml xmlns="http://graphml.graphdrawing.org/xmlns">
  <graph id="G" edgedefault="directed">
    <node id="n0"/>
    <node id="n1"/>
    <edge id="e0" source="n0" target="n1"/>
  </graph>
</graphml>"""


@pytest.fixture
def keyed_graphml():
    """Document exercising key indirection, overrides and odd-but-valid content."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<graphml xmlns="http://graphml.graphdrawing.org/xmlns">
  <key id="d0" for="node" attr.name="label" attr.type="string"/>
  <key id="d1" for="node" attrname="color"/>
  <key id="d2" for="edge"/>
  <graph id="G" edgedefault="undirected">
    <node id="alpha">
      <data key="d0">Alpha</data>
      <data key="d1">red</data>
      <data key="d9">raw token</data>
    </node>
    <node id="beta">
      <data key="d1">blue</data>
      <data key="d1">green</data>
    </node>
    <node id="gamma"><data key="d0"></data></node>
    <edge source="alpha" target="beta"><data key="d2">1.5</data></edge>
    <edge source="beta" target="alpha" directed="true"/>
    <edge source="alpha" target="beta"/>
    <edge source="gamma" target="gamma"/>
    <edge source="alpha" target="ghost"/>
  </graph>
</graphml>"""
