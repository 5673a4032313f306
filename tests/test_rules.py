import pytest

from tetris_core.game import ScoringRules


@pytest.fixture
def rules():
    return ScoringRules()


@pytest.mark.parametrize("lines, score", [(0, 0), (1, 100), (2, 300), (3, 500), (4, 800), (5, 1000), (6, 1200)])
def test_score_for_lines(rules, lines, score):
    assert rules.score_for_lines(lines) == score


@pytest.mark.parametrize("lines, level", [(0, 1), (9, 1), (10, 2), (19, 2), (25, 3), (130, 14)])
def test_level_for_lines(rules, lines, level):
    assert rules.level_for_lines(lines) == level


@pytest.mark.parametrize("level, interval", [(1, 700), (2, 650), (10, 250), (13, 100), (14, 80), (40, 80)])
def test_fall_interval_ms(rules, level, interval):
    assert rules.fall_interval_ms(level) == interval


def test_custom_rules():
    rules = ScoringRules(line_clear_scores=(40, 100, 300, 1200), lines_per_level=5, min_fall_ms=200)
    assert rules.score_for_lines(4) == 1200
    assert rules.level_for_lines(5) == 2
    assert rules.fall_interval_ms(20) == 200
