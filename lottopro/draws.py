import logging, re
from collections import namedtuple
from datetime import date

import requests
from bs4 import BeautifulSoup

from .config import (DRAW_API_URL, DRAW_PAGE_URL, FIRST_DRAW_DATE, HTTP_HEADERS, HTTP_TIMEOUT,
                     TOTAL_BALLS, SELECT_COUNT)

log = logging.getLogger(__name__)

Draw = namedtuple("Draw", ["round", "date", "numbers", "bonus"])

# matched count -> rank; 5 + bonus is handled separately
PRIZE_RANKS = {6: 1, 5: 3, 4: 4, 3: 5}


# ---------- Parsing ----------
def estimate_latest_round(today=None):
    today = today or date.today()
    first = date.fromisoformat(FIRST_DRAW_DATE)
    return max(1, (today - first).days // 7 + 1)

def parse_api_result(data):
    if not isinstance(data, dict) or data.get("returnValue") != "success":
        return None
    try:
        nums = tuple(sorted(int(data[f"drwtNo{j}"]) for j in range(1, SELECT_COUNT + 1)))
        return Draw(int(data["drwNo"]), data.get("drwNoDate"), nums, int(data["bnusNo"]))
    except (KeyError, TypeError, ValueError):
        return None

def parse_korean_date(text):
    m = re.search(r"(\d{4})\s*년\s*(\d{1,2})\s*월\s*(\d{1,2})\s*일", text or "")
    if not m:
        return None
    y, mo, d = (int(g) for g in m.groups())
    try:
        return date(y, mo, d).isoformat()
    except ValueError:
        return None

def parse_result_page(soup):
    box = soup.find("div", class_="win_result")
    if box is None:
        return None
    heading = box.find("h4")
    m = re.search(r"(\d+)\s*회", heading.get_text(" ", strip=True) if heading else "")
    if not m:
        return None
    desc = box.find("p", class_="desc")
    win = box.select("div.num.win span.ball_645")
    bonus = box.select("div.num.bonus span.ball_645")
    try:
        nums = [int(s.get_text(strip=True)) for s in win]
        bonus_n = int(bonus[0].get_text(strip=True)) if bonus else None
    except ValueError:
        return None
    if len(nums) != SELECT_COUNT or any(not 1 <= n <= TOTAL_BALLS for n in nums):
        return None
    return Draw(int(m.group(1)), parse_korean_date(desc.get_text() if desc else ""), tuple(sorted(nums)), bonus_n)


# ---------- Fetch ----------
def _fetch_api(progress_cb=None, today=None):
    latest = estimate_latest_round(today)
    # The estimated round may not be drawn yet (Saturday before the draw).
    for rnd in (latest, latest - 1):
        if rnd < 1:
            break
        url = DRAW_API_URL.format(round=rnd)
        resp = requests.get(url, headers=HTTP_HEADERS, timeout=HTTP_TIMEOUT)
        if resp.status_code != 200:
            if progress_cb: progress_cb(f"[API] Skip round {rnd} (HTTP {resp.status_code})")
            continue
        try:
            draw = parse_api_result(resp.json())
        except ValueError:
            draw = None
        if draw:
            return draw
        if progress_cb: progress_cb(f"[API] Round {rnd} not available")
    return None

def _fetch_page(progress_cb=None, today=None):
    resp = requests.get(DRAW_PAGE_URL, headers=HTTP_HEADERS, timeout=HTTP_TIMEOUT)
    if resp.status_code != 200:
        if progress_cb: progress_cb(f"[WEB] Skip results page (HTTP {resp.status_code})")
        return None
    return parse_result_page(BeautifulSoup(resp.text, "html.parser"))

SOURCES = [("API", _fetch_api), ("WEB", _fetch_page)]


def fetch_latest_draw(progress_cb=None, today=None):
    """Latest official 6/45 result as (Draw, source label); (None, "none") if every source fails."""
    for label, fetch in SOURCES:
        try:
            draw = fetch(progress_cb, today)
        except requests.RequestException as e:
            log.warning("Draw lookup via %s failed: %s", label, e)
            if progress_cb: progress_cb(f"[{label}] Error: {e}")
            continue
        if draw:
            log.info("Latest draw %s from %s: %s + %s", draw.round, label, draw.numbers, draw.bonus)
            return draw, label
    return None, "none"


# ---------- Ticket check ----------
def prize_rank(hits, bonus_hit):
    if hits == 5 and bonus_hit:
        return 2
    return PRIZE_RANKS.get(hits)

def check_ticket(numbers, draw):
    matched = sorted(set(numbers) & set(draw.numbers))
    bonus_hit = draw.bonus in numbers
    return {"matched": matched, "bonus_hit": bonus_hit, "rank": prize_rank(len(matched), bonus_hit)}
