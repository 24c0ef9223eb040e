import csv, logging, os
from collections import namedtuple
from datetime import datetime

from .config import HISTORY_CSV, HISTORY_LIMIT, TOTAL_BALLS, SELECT_COUNT

log = logging.getLogger(__name__)

HistoryRecord = namedtuple("HistoryRecord", ["numbers", "timestamp"])

FIELDS = ["timestamp", "numbers"]


def _parse_line(text):
    nums = tuple(int(n) for n in text.split())
    if len(nums) != SELECT_COUNT or len(set(nums)) != SELECT_COUNT or any(not 1 <= n <= TOTAL_BALLS for n in nums):
        raise ValueError(f"bad combination: {text!r}")
    return tuple(sorted(nums))


class HistoryStore:
    """Most-recent-first list of generated lines, capped at `limit`, kept in a small CSV."""

    def __init__(self, path=HISTORY_CSV, limit=HISTORY_LIMIT):
        self.path = path
        self.limit = limit
        self.records = []

    def load(self):
        self.records = self._read()
        return list(self.records)

    def _read(self):
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, newline="", encoding="utf-8") as f:
                r = csv.DictReader(f)
                if r.fieldnames != FIELDS:
                    raise ValueError(f"unexpected columns: {r.fieldnames}")
                rows = [HistoryRecord(_parse_line(row["numbers"]), row["timestamp"]) for row in r]
        except (OSError, csv.Error, ValueError, KeyError, AttributeError, UnicodeDecodeError) as e:
            log.warning("Ignoring unreadable history %s: %s", self.path, e)
            return []
        return rows[:self.limit]

    def append(self, numbers, timestamp=None):
        ts = timestamp or datetime.now().isoformat(sep=" ", timespec="seconds")
        self.records.insert(0, HistoryRecord(tuple(sorted(numbers)), ts))
        del self.records[self.limit:]
        self._write()
        return list(self.records)

    def clear(self):
        self.records = []
        self._write()

    def _write(self):
        folder = os.path.dirname(self.path)
        if folder: os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f); w.writerow(FIELDS)
            for rec in self.records:
                w.writerow([rec.timestamp, " ".join(map(str, rec.numbers))])
