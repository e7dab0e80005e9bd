"""CSV and JSON rendering of scan reports."""

import csv
import json
from typing import Any, TextIO

from ..common.logging import get_logger
from ..detector.models import ScanReport

logger = get_logger(__name__)


class ReportExporter:
    """Writes scan reports as CSV or JSON to a text stream."""

    def to_dict(self, report: ScanReport) -> dict[str, Any]:
        """Build a JSON-serializable view of a report.

        Args:
            report: Completed scan report

        Returns:
            Dictionary with summary statistics and duplicate groups
        """
        mb, kb = report.total_bytes_mb_kb
        return {
            "root": report.root,
            "all_unique": not report.has_duplicates,
            "files_scanned": report.stats.files_scanned,
            "total_bytes": report.stats.total_bytes,
            "total_size": {"mb": mb, "kb": kb},
            "files_hashed": report.hashed_files,
            "elapsed_seconds": round(report.elapsed, 6),
            "started_at": report.stats.started_at.isoformat(),
            "total_groups": len(report.groups),
            "total_files": report.duplicate_files,
            "total_wasted_space": report.wasted_size,
            "groups": [
                {
                    "group_id": group.group_id,
                    "digest": group.digest,
                    "size": group.size,
                    "count": group.count,
                    "wasted_size": group.wasted_size,
                    "paths": list(group.paths),
                }
                for group in report.groups
            ],
        }

    def export_json(self, report: ScanReport, stream: TextIO) -> None:
        """Write a report as JSON.

        Args:
            report: Completed scan report
            stream: Destination text stream
        """
        json.dump(self.to_dict(report), stream, indent=2)
        stream.write("\n")
        logger.debug(f"Rendered {len(report.groups)} groups as JSON")

    def export_csv(self, report: ScanReport, stream: TextIO) -> None:
        """Write one CSV row per duplicate file.

        Args:
            report: Completed scan report
            stream: Destination text stream
        """
        writer = csv.writer(stream)

        # Header
        writer.writerow(["group_id", "digest", "size", "path"])

        # Data
        for group in report.groups:
            for path in group.paths:
                writer.writerow([group.group_id, group.digest, group.size, path])

        logger.debug(f"Rendered {len(report.groups)} groups as CSV")
