from lottopro.history import HistoryStore


def test_keeps_five_most_recent_first(tmp_path):
    store = HistoryStore(str(tmp_path / "history.csv"))
    for i in range(6):
        store.append([1 + i, 10, 20, 30, 40, 45], timestamp=f"2026-01-0{i + 1} 10:00:00")
    assert len(store.records) == 5
    assert [r.numbers[0] for r in store.records] == [6, 5, 4, 3, 2]
    assert store.records[0].timestamp == "2026-01-06 10:00:00"


def test_reload_from_disk(tmp_path):
    path = str(tmp_path / "sub" / "history.csv")
    store = HistoryStore(path)
    store.append((45, 3, 12, 7, 30, 22))
    loaded = HistoryStore(path).load()
    assert len(loaded) == 1
    assert loaded[0].numbers == (3, 7, 12, 22, 30, 45)
    assert loaded[0].timestamp


def test_missing_file_is_empty(tmp_path):
    assert HistoryStore(str(tmp_path / "nope.csv")).load() == []


def test_corrupt_files_are_empty(tmp_path):
    bad = {
        "garbage.csv": "\x00\x01 not a csv at all",
        "columns.csv": "when,what\n2026-01-01,1 2 3 4 5 6\n",
        "short.csv": "timestamp,numbers\n2026-01-01,1 2 3\n",
        "range.csv": "timestamp,numbers\n2026-01-01,1 2 3 4 5 99\n",
        "dupes.csv": "timestamp,numbers\n2026-01-01,1 1 3 4 5 6\n",
        "text.csv": "timestamp,numbers\n2026-01-01,a b c d e f\n",
        "empty.csv": "",
    }
    for name, body in bad.items():
        p = tmp_path / name
        p.write_text(body, encoding="utf-8")
        assert HistoryStore(str(p)).load() == [], name


def test_binary_file_is_empty(tmp_path):
    p = tmp_path / "history.csv"
    p.write_bytes(b"\xff\xfe\xfa\x00\x81")
    assert HistoryStore(str(p)).load() == []


def test_append_after_corruption_starts_over(tmp_path):
    p = tmp_path / "history.csv"
    p.write_text("junk", encoding="utf-8")
    store = HistoryStore(str(p))
    assert store.load() == []
    store.append([1, 2, 3, 4, 5, 6])
    assert [r.numbers for r in HistoryStore(str(p)).load()] == [(1, 2, 3, 4, 5, 6)]


def test_clear(tmp_path):
    store = HistoryStore(str(tmp_path / "history.csv"))
    store.append([1, 2, 3, 4, 5, 6])
    store.clear()
    assert store.load() == []
