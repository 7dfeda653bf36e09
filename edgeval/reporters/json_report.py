"""
JSON Reporter — writes a sampling run to a structured JSON file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from edgeval import __version__
from edgeval.models import SampleReport

logger = logging.getLogger(__name__)


def generate_json_report(report: SampleReport, output_path: str) -> bool:
    """
    Generate a JSON report from a SampleReport.

    Args:
        report: The SampleReport holding the generated samples
        output_path: Path to write the JSON file

    Returns:
        True if successful, False otherwise
    """
    try:
        # model_dump(mode="json") handles datetimes and enums
        report_data = report.model_dump(mode="json")

        report_data["seed_hex"] = f"{report.seed:#018x}"
        report_data["class_counts"] = report.class_counts()
        report_data["report_generated_at"] = datetime.now(timezone.utc).isoformat()
        report_data["version"] = __version__

        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(report_data, f, indent=2)

        return True
    except OSError as e:
        logger.debug(f"Failed to write report to {output_path}: {e}")
        return False
