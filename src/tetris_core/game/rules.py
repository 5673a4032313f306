from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    # Per-line score for clears outside the table
    fallback_line_score: int = 200
    lines_per_level: int = 10
    base_fall_ms: int = 700
    fall_ms_per_level: int = 50
    min_fall_ms: int = 80

    def score_for_lines(self, lines: int) -> int:
        """Base score for clearing `lines` rows at once, before the level multiplier."""
        if lines <= 0:
            return 0
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1]
        return lines * self.fallback_line_score

    def level_for_lines(self, lines: int) -> int:
        return 1 + lines // self.lines_per_level

    def fall_interval_ms(self, level: int) -> int:
        return max(self.min_fall_ms, self.base_fall_ms - (level - 1) * self.fall_ms_per_level)
