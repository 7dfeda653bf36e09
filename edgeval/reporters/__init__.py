from edgeval.reporters.json_report import generate_json_report

__all__ = [
    "generate_json_report",
]
