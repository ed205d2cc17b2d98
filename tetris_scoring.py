"""Line-clear scoring, level progression and gravity speed"""
from dataclasses import dataclass

from tetris_config import CONFIG


def line_clear_points(rows: int, level: int, table=CONFIG["LINE_SCORES"]) -> int:
    return table[rows] * level


def level_for_lines(lines: int, per_level: int = CONFIG["LINES_PER_LEVEL"]) -> int:
    return lines // per_level + 1


def drop_interval_ms(level: int, config=CONFIG) -> int:
    """Milliseconds between gravity steps; 100 ms faster per level, floored."""
    return max(config["MIN_DROP_MS"],
               config["BASE_DROP_MS"] - (level - 1) * config["DROP_STEP_MS"])


@dataclass
class ScoreState:
    score: int = 0
    level: int = 1
    lines: int = 0

    def add_drop(self, points: int) -> None:
        self.score += points

    def apply_clear(self, rows: int, config=CONFIG) -> int:
        """Score a simultaneous clear at the current level; returns points awarded."""
        points = line_clear_points(rows, self.level, config["LINE_SCORES"])
        self.score += points
        self.lines += rows
        self.level = max(self.level, level_for_lines(self.lines, config["LINES_PER_LEVEL"]))
        return points
