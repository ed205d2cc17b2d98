
CONFIG = {
    "COLS": 10,
    "ROWS": 20,
    "CELL_SIZE": 30,
    "CLEAR_ANIMATION_MS": 500,
    "BASE_DROP_MS": 1000,
    "DROP_STEP_MS": 100,
    "MIN_DROP_MS": 100,
    "LINES_PER_LEVEL": 10,
    "LINE_SCORES": (0, 100, 300, 500, 800),
    "SOFT_DROP_POINTS": 1,
    "HARD_DROP_POINTS_PER_ROW": 2,
    "KEY_REPEAT_DELAY_MS": 170,
    "KEY_REPEAT_INTERVAL_MS": 50,
    "SEED": None,
    "LOG_LEVEL": "INFO",
}
