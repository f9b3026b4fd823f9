"""
JSON Report Exporter Adapter

Writes and reads NetworkReport documents.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from versenet.domain.models import NetworkReport


class JsonReportExporter:
    """
    JSON adapter for statistics reports.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.logger = logging.getLogger(__name__)

    def export_json(self, data: Any, output_path: Union[str, Path]) -> str:
        """Export a report (or any object with to_dict) to a JSON file."""
        if hasattr(data, "to_dict"):
            data = data.to_dict()

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=self.indent)
            f.write("\n")

        self.logger.info(f"Statistics exported to {path}")
        return str(path)

    def load_json(self, input_path: Union[str, Path]) -> NetworkReport:
        """Read a report written by export_json."""
        with open(input_path, encoding="utf-8") as f:
            return NetworkReport.from_dict(json.load(f))
