"""Audit trail formatter.

Summarizes the outbound calls made while building a view:
- Sources consulted and their call counts
- Endpoints hit, with status and duration
"""

import logging

from ..core.models import LeaderboardView

logger = logging.getLogger(__name__)


class AuditTrailFormatter:
    """Formats audit trail information for transparency."""

    def _summarize_sources(self, view: LeaderboardView) -> dict[str, dict]:
        """Group audit entries by source."""
        summary: dict[str, dict] = {}
        for entry in view.audit_trail:
            info = summary.setdefault(
                entry.source.display_name,
                {"total_count": 0, "success_count": 0, "duration_ms": 0},
            )
            info["total_count"] += 1
            if entry.success:
                info["success_count"] += 1
            info["duration_ms"] += entry.duration_ms or 0
        return summary

    def format_summary(self, view: LeaderboardView) -> str:
        """
        Format a summary of the audit trail.

        Args:
            view: LeaderboardView with audit data

        Returns:
            Formatted string summary
        """
        lines = []
        lines.append("=" * 70)
        lines.append("AUDIT TRAIL SUMMARY")
        lines.append("=" * 70)
        lines.append("")
        lines.append(f"Generated: {view.generated_at.isoformat()}")
        lines.append(f"Token: {view.token.symbol} ({view.token.address})")
        lines.append("")

        lines.append("DATA SOURCES CONSULTED")
        lines.append("-" * 40)
        for source, info in self._summarize_sources(view).items():
            status = "OK" if info["success_count"] == info["total_count"] else "FAILED"
            lines.append(f"  {source}: {status}")
            lines.append(f"    - Calls: {info['total_count']} ({info['success_count']} successful)")
            lines.append(f"    - Total time: {info['duration_ms']}ms")
        lines.append("")

        lines.append("CALLS")
        lines.append("-" * 40)
        for entry in view.audit_trail:
            mark = "ok" if entry.success else f"FAILED: {entry.error_message}"
            duration = f"{entry.duration_ms}ms" if entry.duration_ms is not None else "-"
            lines.append(f"  [{entry.source.value}] {entry.action} {entry.endpoint} {duration} {mark}")
        lines.append("")

        return "\n".join(lines)
