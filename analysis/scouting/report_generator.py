"""Report generation for scouting analysis."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from html import escape
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional

import matplotlib
import matplotlib.pyplot as plt
import numpy as np

# Use non-interactive backend for server-side generation
matplotlib.use('Agg')

from log_config.logger import get_logger

from analysis.scouting.schemas import (
    AnalysisResult,
    CoachingAdvice,
    FatigueAssessment,
    to_serializable,
)

logger = get_logger(__name__)

SCHEMA_VERSION = "1.0.0"

SEVERITY_COLORS = {
    "high": "#f44336",
    "medium": "#ff9800",
    "low": "#ffeb3b",
}


@dataclass
class ScoutingReport:
    """Combined analysis, fatigue and coaching output for one scope."""

    analysis: AnalysisResult
    fatigue: FatigueAssessment
    advice: CoachingAdvice
    pitcher_id: Optional[str] = None
    game_id: Optional[str] = None
    created_utc: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="seconds")
    )
    schema_version: str = SCHEMA_VERSION

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "schema_version": self.schema_version,
            "created_utc": self.created_utc,
            "pitcher_id": self.pitcher_id,
            "game_id": self.game_id,
            "analysis": to_serializable(self.analysis),
            "fatigue": to_serializable(self.fatigue),
            "advice": to_serializable(self.advice),
        }


class ReportGenerator:
    """Generate JSON and HTML scouting reports."""

    def __init__(self, dpi: int = 100):
        self.dpi = dpi  # DPI for chart rendering

    def generate_json_report(self, report: ScoutingReport, output_path: Path) -> None:
        """Generate JSON report file.

        Args:
            report: Scouting report
            output_path: Path to output JSON file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            json.dump(report.to_dict(), f, indent=2)

        logger.info(f"Wrote JSON report to {output_path}")

    def generate_html_report(self, report: ScoutingReport, output_path: Path) -> None:
        """Generate HTML report with embedded charts.

        Args:
            report: Scouting report
            output_path: Path to output HTML file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        mix_chart = self._generate_pitch_mix_chart(report.analysis)
        trend_chart = self._generate_trend_chart(report.fatigue)

        output_path.write_text(self._build_html(report, mix_chart, trend_chart))
        logger.info(f"Wrote HTML report to {output_path}")

    def _generate_pitch_mix_chart(self, analysis: AnalysisResult) -> str:
        """Pitch type distribution as a pie chart.

        Returns:
            Base64-encoded PNG data URI
        """
        fig, ax = plt.subplots(figsize=(8, 6))

        mix = analysis.partition("pitch_type")
        if not mix.has_data:
            ax.text(0.5, 0.5, 'No pitch type data available', ha='center', va='center', fontsize=14)
            ax.axis('off')
            return self._fig_to_base64(fig)

        labels = [str(c) for c in mix.categories]
        sizes = list(mix.counts.values())
        colors = plt.cm.Set3(np.linspace(0, 1, len(labels)))

        _, _, autotexts = ax.pie(sizes, labels=labels, colors=colors, autopct='%1.0f%%',
                                 startangle=90, textprops={'fontsize': 11})
        for autotext in autotexts:
            autotext.set_fontweight('bold')

        ax.set_title('Pitch Type Distribution', fontsize=14, fontweight='bold')
        return self._fig_to_base64(fig)

    def _generate_trend_chart(self, fatigue: FatigueAssessment) -> Optional[str]:
        """Strike percentage and proxy series per segment.

        Returns:
            Base64-encoded PNG data URI, or None without trend data
        """
        trends = fatigue.trends
        if trends is None or not trends.segments:
            return None

        fig, ax = plt.subplots(figsize=(10, 6))
        x = [s.index + 1 for s in trends.segments]

        ax.plot(x, trends.strike_percentages, 'o-', color='#2196F3', linewidth=2, label='Strike %')
        ax.plot(x, trends.consistency_proxies, 's--', color='#ff9800',
                label='Location consistency (heuristic)')
        ax.set_xlabel('Segment', fontsize=12)
        ax.set_ylabel('Percent', fontsize=12)
        ax.set_ylim(0, 105)
        ax.set_xticks(x)

        velocity_ax = ax.twinx()
        velocity_ax.plot(x, trends.velocity_proxies, '^:', color='#9c27b0',
                         label='Velocity (heuristic, mph)')
        velocity_ax.set_ylabel('Estimated mph', fontsize=12)

        lines = ax.get_lines() + velocity_ax.get_lines()
        ax.legend(lines, [line.get_label() for line in lines], loc='lower left')
        ax.set_title(f'Trends per {trends.segment_size}-Pitch Segment', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)

        return self._fig_to_base64(fig)

    def _fig_to_base64(self, fig) -> str:
        """Convert matplotlib figure to base64-encoded PNG data URI."""
        buffer = BytesIO()
        fig.savefig(buffer, format='png', dpi=self.dpi, bbox_inches='tight')
        buffer.seek(0)
        img_base64 = base64.b64encode(buffer.read()).decode('utf-8')
        plt.close(fig)

        return f"data:image/png;base64,{img_base64}"

    @staticmethod
    def _list_items(items: List[str]) -> str:
        items = [item for item in items if item]
        if not items:
            return "<li>None</li>"
        return "".join(f"<li>{escape(item)}</li>" for item in items)

    def _build_html(self, report: ScoutingReport, mix_chart: str, trend_chart: Optional[str]) -> str:
        analysis, fatigue, advice = report.analysis, report.fatigue, report.advice
        title = escape(report.pitcher_id or "All pitchers")
        if report.game_id:
            title += f" - Game {escape(report.game_id)}"

        prediction_rows = "".join(
            f"<tr><td>{escape(p.situation)}</td><td>{escape(p.pitch_type)}</td>"
            f"<td>{p.confidence}%</td><td>{p.sample_size}</td></tr>"
            for p in analysis.predictions.values()
        )

        indicator_rows = ""
        for indicator in fatigue.indicators:
            color = SEVERITY_COLORS.get(indicator.severity, "#ccc")
            label = escape(indicator.signal) + (" (heuristic)" if indicator.heuristic else "")
            indicator_rows += (
                f"<tr><td>{label}</td>"
                f'<td style="background-color: {color}; font-weight: bold;">{indicator.severity}</td>'
                f"<td>{escape(indicator.detail)}</td><td>+{indicator.points}</td></tr>"
            )

        advice_html = "<p>No coaching advice available</p>"
        if advice.has_data:
            approach = advice.batter_approach
            management = advice.pitcher_management
            strategy = advice.game_strategy
            adjustments = advice.in_game_adjustments
            side_html = ""
            for side, cards in advice.by_batter_side.items():
                note = " (all pitches)" if cards.used_all_pitches else ""
                side_html += f"<h4>Vs {escape(side)} Batters{note}</h4><ul>" + self._list_items(
                    [f"{c.advice} ({c.confidence}%)" for c in (cards.general, cards.first_pitch, cards.two_strikes)]
                    + [cards.key_count.advice]
                ) + "</ul>"
            advice_html = f"""
            <h3>Batter Approach</h3>
            <ul>{self._list_items([
                approach.general,
                approach.first_pitch or "",
                approach.two_strikes or "",
                approach.key_count.advice,
            ])}</ul>
            {side_html}
            <h3>Pitcher Management (risk: {management.fatigue_risk})</h3>
            <ul>{self._list_items(management.warnings + management.recommendations)}</ul>
            <h3>Game Strategy</h3>
            <p>{escape(strategy.overall)}</p>
            <ul>{self._list_items(
                [f"Strength: {s}" for s in strategy.strengths]
                + [f"Weakness: {w}" for w in strategy.weaknesses]
            )}</ul>
            <h3>In-Game Adjustments</h3>
            <p>{escape(adjustments.recommendation)}</p>
            <ul>{self._list_items(adjustments.adjustments)}</ul>
            <h3>Defense</h3>
            <ul>{self._list_items(advice.defensive_advice.recommendations)}</ul>
            """

        trend_html = (
            f'<div class="chart"><img src="{trend_chart}" alt="Segment Trends"></div>'
            if trend_chart
            else f"<p>{escape(fatigue.message or 'No trend data')}</p>"
        )

        return f"""
<!DOCTYPE html>
<html>
<head>
    <title>Scouting Report - {title}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }}
        .container {{ max-width: 1200px; margin: 0 auto; background-color: white; padding: 30px; }}
        h1 {{ color: #2196F3; border-bottom: 3px solid #2196F3; padding-bottom: 10px; }}
        .summary-box {{ background-color: #e3f2fd; padding: 20px; border-radius: 5px; margin: 20px 0; }}
        table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
        th, td {{ border: 1px solid #ddd; padding: 12px; text-align: left; }}
        th {{ background-color: #2196F3; color: white; }}
        .chart {{ margin: 30px 0; text-align: center; }}
        .chart img {{ max-width: 100%; height: auto; }}
        .footer {{ margin-top: 40px; text-align: center; color: #666; font-size: 12px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Scouting Report: {title}</h1>

        <div class="summary-box">
            <p><strong>Generated:</strong> {report.created_utc}</p>
            <p><strong>Total Pitches:</strong> {analysis.total_pitches}</p>
            <p><strong>Data Quality:</strong> {analysis.quality or 'n/a'}</p>
            <p><strong>Strike Percentage:</strong> {analysis.rates.strike_percentage if analysis.rates else 0}%</p>
            <p><strong>Fatigue Warning:</strong> {fatigue.warning_level} (score {fatigue.score})</p>
            <p><strong>Recommendation:</strong> {escape(fatigue.recommendation)}</p>
        </div>

        <h2>Pitch Mix</h2>
        <div class="chart"><img src="{mix_chart}" alt="Pitch Mix"></div>

        <h2>Situational Predictions</h2>
        <table>
            <tr><th>Situation</th><th>Pitch Type</th><th>Confidence</th><th>Sample</th></tr>
            {prediction_rows or '<tr><td colspan="4">Not enough pitches for any prediction</td></tr>'}
        </table>

        <h2>Fatigue Trends</h2>
        {trend_html}
        <table>
            <tr><th>Signal</th><th>Severity</th><th>Detail</th><th>Points</th></tr>
            {indicator_rows or '<tr><td colspan="4">No fatigue indicators</td></tr>'}
        </table>

        <h2>Coaching Advice</h2>
        {advice_html}

        <div class="footer">
            <p>Velocity and location consistency values are heuristic estimates, not measurements.</p>
            <p>Report Version: {report.schema_version}</p>
        </div>
    </div>
</body>
</html>
        """


__all__ = ["ReportGenerator", "ScoutingReport"]
