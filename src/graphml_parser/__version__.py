"""Version information for graphml_parser."""

__version__ = "0.1.0"
__author__ = "gmlview contributors"
__description__ = "Standalone GraphML markup to graph-model parser"
