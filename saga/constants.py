"""Constants for the Saga standings engine."""

from pathlib import Path

# Project layout
PROJECT_DIR = Path(__file__).parent.parent
DATA_DIR = PROJECT_DIR / 'data'
CONFIG_PATH = DATA_DIR / 'saga_config.json'

# Match statuses
STATUS_SCHEDULED = 'scheduled'
STATUS_LIVE = 'live'
STATUS_COMPLETED = 'completed'
STATUS_CANCELLED = 'cancelled'
STATUS_WALKOVER = 'walkover'

MATCH_STATUSES = (
    STATUS_SCHEDULED,
    STATUS_LIVE,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
    STATUS_WALKOVER,
)

# Statuses the classifier treats as already finished
FINISHED_STATUSES = (STATUS_COMPLETED, STATUS_WALKOVER)

# Day statuses
DAY_GENERATED = 'generated'
DAY_COMPLETED = 'completed'

# DBZ points
WIN_POINTS = 3
BAGEL_BONUS = 1
LOSS_POINTS = 1
CLOSE_LOSS_BONUS = 1
CLOSE_LOSS_THRESHOLD = 10  # loser score that earns the bonus
BAGELED_POINTS = 0

# 60% rule
ELIGIBILITY_RATIO = 0.6

# Sorting
PPG_EPSILON = 1e-6

# Classifier
DEFAULT_ORDER_INDEX = 999
PREVIEW_COURTS = (1, 2)
BOARD_LIVE = 'live'
BOARD_PENDING = 'pending'

# Report
REPORT_TOP_N = 3
