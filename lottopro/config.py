import logging, os

from . import APP_NAME, APP_VER

# ---------- Game ----------
TOTAL_BALLS = 45
SELECT_COUNT = 6
MAX_FIXED = 2

# ---------- Search ----------
EXHAUSTIVE_DRAWS = 10000   # "Monte Carlo" mode
QUICK_DRAWS = 100
BATCH_SIZE = 500
MAX_DISCARDS = 1000        # sampler gives up after this many rejected draws

# (reward on pass, penalty on fail)
SCORE_TABLE = {
    "sum":    (20, -50),
    "ac":     (15, -20),
    "mirror": (10, 0),
    "matrix": (10, -10),
}
NOISE_SPAN = 10.0

DEFAULT_FILTERS = {"sum": True, "ac": True, "mirror": True, "matrix": True}

PHASES = [
    (0.0, "Generating candidates..."),
    (0.3, "Analyzing AC complexity..."),
    (0.6, "Matching matrix patterns..."),
    (0.9, "Selecting best numbers..."),
]

# ---------- Weights ----------
BASE_WEIGHT = 1.0
CENTER_RANGE = (10, 35); CENTER_BONUS = 0.3
HOT_NUMBERS = (1, 13, 17, 33, 40); HOT_BONUS = 0.5
COLD_NUMBERS = (9, 22, 41); COLD_PENALTY = 0.4
WEIGHT_NOISE = 0.2
WEIGHT_FLOOR = 0.1

# ---------- History ----------
HISTORY_LIMIT = 5
DATA_DIR = os.environ.get("LOTTOPRO_HOME") or os.path.join(os.path.expanduser("~"), f".{APP_NAME.lower()}")
HISTORY_CSV = os.path.join(DATA_DIR, "history.csv")

# ---------- Official draws ----------
DRAW_API_URL = "https://www.dhlottery.co.kr/common.do?method=getLottoNumber&drwNo={round}"
DRAW_PAGE_URL = "https://www.dhlottery.co.kr/gameResult.do?method=byWin"
FIRST_DRAW_DATE = "2002-12-07"
HTTP_HEADERS = {"User-Agent": f"{APP_NAME}/{APP_VER}"}
HTTP_TIMEOUT = 10

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def draws_for(exhaustive):
    return EXHAUSTIVE_DRAWS if exhaustive else QUICK_DRAWS


def setup_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)
