"""Shared fixtures for gmlview tests."""

import pytest

from gmlview.config import create_default_config
from gmlview.graph import RenderEngine
from gmlview.session import ViewerSession
from graphml_parser import GraphmlParser


@pytest.fixture
def config():
    return create_default_config()


@pytest.fixture
def engine(config):
    return RenderEngine(config)


@pytest.fixture
def session(config):
    return ViewerSession(config, source_name="sample.graphml")


@pytest.fixture
def build():
    """Build a GraphModel from text."""
    return GraphmlParser().build


@pytest.fixture
def sample_graphml():
    """Small pipeline graph with labels, a parallel edge and mixed directedness."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<graphml xmlns="http://graphml.graphdrawing.org/xmlns">
  <key id="d0" for="node" attr.name="label"/>
  <key id="d1" for="edge" attr.name="label"/>
  <graph id="G" edgedefault="directed">
    <node id="ingest"><data key="d0">Ingest</data></node>
    <node id="parse_a"><data key="d0">Parse A</data></node>
    <node id="parse_b"/>
    <node id="store"/>
    <edge source="ingest" target="parse_a"><data key="d1">raw</data></edge>
    <edge source="ingest" target="parse_b"/>
    <edge source="parse_a" target="store"/>
    <edge source="parse_b" target="store" directed="false"/>
    <edge source="parse_b" target="store"/>
  </graph>
</graphml>"""


@pytest.fixture
def dangling_graphml():
    """Edge pointing at an undeclared node."""
    return """<graphml>
  <graph edgedefault="undirected">
    <node id="a"/>
    <edge source="a" target="missing"/>
  </graph>
</graphml>"""


@pytest.fixture
def malformed_graphml():
    return "<graphml><graph><node id='a'></graph>"
