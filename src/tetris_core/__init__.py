"""Rules engine for a falling-block puzzle game, plus a Gymnasium adapter."""

from .game import Action, GameConfig, GameState, ScoringRules, TetrisGame

__all__ = ["Action", "GameConfig", "GameState", "ScoringRules", "TetrisGame"]
