"""Markdown output formatter for ranking results.

Generates a shareable markdown summary of a finished session.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from ..engine.session import RankingResult

_MD_SPECIAL = re.compile(r'([\\`*_\{\}\[\]()#+\-.!|])')


def _escape_md(text: str) -> str:
    """Escape markdown special characters in user-derived text."""
    return _MD_SPECIAL.sub(r'\\\1', text)


class MarkdownOutput:
    """Markdown output formatter."""

    def generate(
        self,
        result: RankingResult,
        include_preferences: bool = True
    ) -> str:
        """Generate full markdown report.

        Args:
            result: Finished session result
            include_preferences: Whether to list the recorded answers

        Returns:
            Markdown formatted string
        """
        sections = [
            self._generate_header(),
            self._generate_summary(result),
            self._generate_ranking(result),
        ]

        if not result.is_complete:
            sections.append(self._generate_unranked(result))

        if include_preferences:
            sections.append(self._generate_preferences(result))

        return "\n\n".join(sections)

    def save(
        self,
        result: RankingResult,
        output_path: str | Path,
        **kwargs
    ) -> None:
        """Save markdown report to file.

        Args:
            result: Finished session result
            output_path: Path to save the report
            **kwargs: Additional arguments passed to generate()
        """
        content = self.generate(result, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _generate_header(self) -> str:
        lines = [
            "# Preference Ranking",
            "",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "**Tool:** Khai-Khai Preference Ranking Game",
        ]
        return "\n".join(lines)

    def _generate_summary(self, result: RankingResult) -> str:
        """Generate session summary."""
        status = "Complete" if result.is_complete else "Partial"
        inferred = result.progress.completed - result.questions_asked
        lines = [
            "## Summary",
            "",
            f"- **Items:** {len(result.items)}",
            f"- **Strategy:** {result.strategy.value}",
            f"- **Questions Asked:** {result.questions_asked}",
            f"- **Inferred Comparisons:** {inferred}",
            f"- **Ranking:** {status} ({len(result.ranking)}/{len(result.items)} items)",
        ]

        if result.ranking:
            lines.extend([
                "",
                "### Top Choice",
                "",
                f"> {_escape_md(result.ranking[0])}",
            ])

        return "\n".join(lines)

    def _generate_ranking(self, result: RankingResult) -> str:
        lines = ["## Ranking", ""]
        for place, item in enumerate(result.ranking, 1):
            lines.append(f"{place}. {_escape_md(item)}")
        if not result.ranking:
            lines.append("*No items could be ranked.*")
        return "\n".join(lines)

    def _generate_unranked(self, result: RankingResult) -> str:
        """Generate the section for items a contradiction left out."""
        lines = [
            "## Unranked Items",
            "",
            "Some answers contradicted each other, so these items could not be placed:",
            "",
        ]
        for item in result.unranked:
            lines.append(f"- {_escape_md(item)}")
        return "\n".join(lines)

    def _generate_preferences(self, result: RankingResult) -> str:
        """Generate the appendix of recorded answers."""
        lines = ["## Recorded Preferences", ""]
        count = 0
        for preferred, beaten in result.preferences.items():
            for less_preferred in beaten:
                lines.append(f"- {_escape_md(preferred)} over {_escape_md(less_preferred)}")
                count += 1
        if count == 0:
            lines.append("*No preferences recorded.*")
        return "\n".join(lines)
