"""
Export Adapters Package

Report and graph export implementations (JSON, GraphML).
"""

from .json_exporter import JsonReportExporter
from .graphml_exporter import GraphMLExporter, to_networkx

__all__ = [
    "JsonReportExporter",
    "GraphMLExporter",
    "to_networkx",
]
