"""JSON output formatter for ranking results.

Generates structured JSON for programmatic use.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from .. import __version__
from ..engine.session import RankingResult


class JSONOutput:
    """JSON output formatter."""

    def generate(
        self,
        result: RankingResult,
        include_preferences: bool = True
    ) -> dict:
        """Generate JSON-serializable dictionary.

        Args:
            result: Finished session result
            include_preferences: Whether to include the recorded answers

        Returns:
            Dictionary ready for JSON serialization
        """
        data: dict[str, Any] = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
                "tool": "Khai-Khai",
                "version": __version__,
            }
        }

        data["summary"] = self._generate_summary(result)
        data["ranking"] = [
            {"rank": place, "item": item}
            for place, item in enumerate(result.ranking, 1)
        ]
        data["unranked"] = result.unranked

        if include_preferences:
            data["preferences"] = result.preferences

        return data

    def to_json(
        self,
        result: RankingResult,
        indent: int = 2,
        **kwargs
    ) -> str:
        """Generate JSON string.

        Args:
            result: Finished session result
            indent: JSON indentation level
            **kwargs: Additional arguments passed to generate()

        Returns:
            JSON formatted string
        """
        data = self.generate(result, **kwargs)
        return json.dumps(data, indent=indent, default=str)

    def save(
        self,
        result: RankingResult,
        output_path: str | Path,
        **kwargs
    ) -> None:
        """Save JSON report to file.

        Args:
            result: Finished session result
            output_path: Path to save the report
            **kwargs: Additional arguments passed to generate()
        """
        content = self.to_json(result, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _generate_summary(self, result: RankingResult) -> dict:
        """Generate summary statistics."""
        return {
            "items": len(result.items),
            "ranked": len(result.ranking),
            "complete": result.is_complete,
            "strategy": result.strategy.value,
            "questions_asked": result.questions_asked,
            "inferred": result.progress.completed - result.questions_asked,
            "progress": {
                "completed": result.progress.completed,
                "total": result.progress.total,
                "percentage": result.progress.percentage,
            },
        }


def export_json(
    result: RankingResult,
    output_path: str | Path | None = None,
    **kwargs
) -> str | None:
    """Convenience function to export a result to JSON.

    Args:
        result: Finished session result
        output_path: Optional path to save file. If None, returns string.
        **kwargs: Additional arguments passed to JSONOutput.generate()

    Returns:
        JSON string if no output_path, None otherwise
    """
    output = JSONOutput()

    if output_path:
        output.save(result, output_path, **kwargs)
        return None
    else:
        return output.to_json(result, **kwargs)
