
CONFIG = {
    "CELL_SIZE": 32,
    "DAS_MS": 170,
    "ARR_MS": 30,
    "LOCK_DELAY_MS": 1000,
    "SPEED_UNIT_MS": 1000,
    "MAX_SPEED_LEVEL": 20,
    "SEED": None,
    "LOG_LEVEL": "WARNING",
}
