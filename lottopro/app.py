#!/usr/bin/env python3
# LottoPro desktop window
# - Filter toggles with tooltips, exclusion / fixed number entries
# - Search runs on a worker thread, progress marshalled back with after()
# - Colored balls, stats line, recent history (5), latest draw check

import logging, threading
import tkinter as tk
from tkinter import ttk, messagebox

from . import APP_NAME, APP_VER
from .config import DEFAULT_FILTERS, HISTORY_LIMIT, draws_for, setup_logging
from .draws import fetch_latest_draw, check_ticket
from .filters import FILTER_LABELS, describe, evaluate
from .history import HistoryStore
from .search import CONFIG_ERROR, run_search, parse_numbers

log = logging.getLogger(__name__)

ACCENT = "#1f3b73"
BALL_COLORS = [(10, "#fbc400"), (20, "#69c8f2"), (30, "#ff7272"), (40, "#aaaaaa"), (45, "#b0d840")]
RANK_NAMES = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th", 5: "5th"}

TIPS = {
    "sum": "Reward combinations whose total is 120-170 (heavy penalty otherwise).",
    "ac": "Reward arithmetic complexity (distinct gaps) of 7 or more.",
    "mirror": "Bonus when two numbers share a last digit, e.g. 3 and 23.",
    "matrix": "Penalize more than 4 numbers in one band (1-15, 16-30, 31-45).",
    "exhaustive": "Monte Carlo mode: score 10,000 candidates instead of 100.",
    "weighted": "Draw with the built-in hot/cold weights instead of uniformly.",
}


def ball_color(n):
    for top, color in BALL_COLORS:
        if n <= top:
            return color
    return BALL_COLORS[-1][1]


# ---------- ToolTip ----------
class ToolTip:
    def __init__(self, widget, text, delay=500):
        self.widget, self.text, self.delay = widget, text, delay
        self.tip = None; self.pending = None
        widget.bind("<Enter>", self._arm)
        widget.bind("<Leave>", self._hide)
        widget.bind("<ButtonPress>", self._hide)

    def _arm(self, _=None):
        self._hide()
        self.pending = self.widget.after(self.delay, self._show)

    def _hide(self, _=None):
        if self.pending: self.widget.after_cancel(self.pending); self.pending = None
        if self.tip: self.tip.destroy(); self.tip = None

    def _show(self):
        if self.tip or not self.text: return
        x = self.widget.winfo_rootx() + 16
        y = self.widget.winfo_rooty() + self.widget.winfo_height() + 4
        self.tip = tk.Toplevel(self.widget); self.tip.wm_overrideredirect(True); self.tip.wm_geometry(f"+{x}+{y}")
        tk.Label(self.tip, text=self.text, bg="#ffffe0", relief="solid", borderwidth=1, wraplength=280,
                 justify="left", font=("Segoe UI", 9)).pack(ipadx=6, ipady=4)


# ---------- GUI ----------
class LottoProApp(tk.Tk):
    def __init__(self, history=None):
        super().__init__()
        self.title(f"{APP_NAME} {APP_VER}")
        self.geometry("760x640"); self.minsize(680, 560); self.configure(bg="white")

        self.history = history or HistoryStore()
        self.filter_vars = {k: tk.BooleanVar(value=v) for k, v in DEFAULT_FILTERS.items()}
        self.exhaustive_var = tk.BooleanVar(value=True)
        self.weighted_var = tk.BooleanVar(value=True)
        self.exclude_var = tk.StringVar()
        self.fixed_var = tk.StringVar()
        self.phase_var = tk.StringVar(value="")
        self.stats_var = tk.StringVar(value="Press Generate to draw a line.")
        self.report_var = tk.StringVar(value="")
        self.status_var = tk.StringVar(value="Ready")

        self.current = None
        self.cancel_event = None

        self._build_ui()
        self.history.load(); self.refresh_history_view()

    def _build_ui(self):
        header = tk.Frame(self, bg=ACCENT, height=64); header.pack(fill="x", side="top")
        tk.Label(header, text=APP_NAME, fg="white", bg=ACCENT, font=("Segoe UI", 18, "bold")).pack(side="left", padx=16, pady=12)
        tk.Label(header, text="Lotto 6/45 generator with statistical filters", fg="white", bg=ACCENT, font=("Segoe UI", 10)).pack(side="left", padx=6, pady=12)

        opts = ttk.LabelFrame(self, text="Filters"); opts.pack(fill="x", padx=16, pady=(10, 4))
        for col, (key, var) in enumerate(self.filter_vars.items()):
            chk = ttk.Checkbutton(opts, text=FILTER_LABELS[key], variable=var); chk.grid(row=0, column=col, sticky="w", padx=8, pady=4)
            ToolTip(chk, TIPS[key])
        chk = ttk.Checkbutton(opts, text="Monte Carlo (10,000)", variable=self.exhaustive_var); chk.grid(row=1, column=0, columnspan=2, sticky="w", padx=8, pady=4)
        ToolTip(chk, TIPS["exhaustive"])
        chk = ttk.Checkbutton(opts, text="AI weights", variable=self.weighted_var); chk.grid(row=1, column=2, columnspan=2, sticky="w", padx=8, pady=4)
        ToolTip(chk, TIPS["weighted"])

        nums = tk.Frame(self, bg="white"); nums.pack(fill="x", padx=16, pady=4)
        tk.Label(nums, text="Exclude:", bg="white").pack(side="left")
        ent = ttk.Entry(nums, textvariable=self.exclude_var, width=24); ent.pack(side="left", padx=6)
        ToolTip(ent, "Comma separated numbers that must not appear, e.g. 4, 13, 44")
        tk.Label(nums, text="Fixed:", bg="white").pack(side="left", padx=(12, 0))
        ent = ttk.Entry(nums, textvariable=self.fixed_var, width=10); ent.pack(side="left", padx=6)
        ToolTip(ent, "Up to two numbers that must appear in the line, e.g. 7, 12")

        actions = tk.Frame(self, bg="white"); actions.pack(fill="x", padx=16, pady=6)
        self.btn_generate = ttk.Button(actions, text="Generate", command=self.generate); self.btn_generate.pack(side="left")
        self.btn_cancel = ttk.Button(actions, text="Cancel", command=self.cancel, state="disabled"); self.btn_cancel.pack(side="left", padx=6)
        btn_copy = ttk.Button(actions, text="Copy", command=self.copy_current); btn_copy.pack(side="left", padx=6)
        btn_check = ttk.Button(actions, text="Check latest draw", command=self.check_latest); btn_check.pack(side="right")
        ToolTip(btn_check, "Fetch the latest official 6/45 result and compare it with the current line.")

        prog = tk.Frame(self, bg="white"); prog.pack(fill="x", padx=16)
        self.progress = ttk.Progressbar(prog, mode="determinate", maximum=100); self.progress.pack(fill="x")
        tk.Label(prog, textvariable=self.phase_var, bg="white", fg="#555").pack(anchor="w")

        self.canvas = tk.Canvas(self, bg="white", height=90, highlightthickness=0); self.canvas.pack(fill="x", padx=16, pady=6)
        tk.Label(self, textvariable=self.stats_var, bg="white", font=("Segoe UI", 10, "bold")).pack(anchor="w", padx=16)
        tk.Label(self, textvariable=self.report_var, bg="white", fg="#555").pack(anchor="w", padx=16)

        hist = ttk.LabelFrame(self, text=f"Recent ({HISTORY_LIMIT})"); hist.pack(fill="both", expand=True, padx=16, pady=8)
        tree = ttk.Treeview(hist, columns=("timestamp", "numbers"), show="headings", height=HISTORY_LIMIT)
        tree.heading("#1", text="Time"); tree.heading("#2", text="Numbers")
        tree.column("#1", width=180, anchor="w"); tree.column("#2", width=420, anchor="w")
        tree.pack(fill="both", expand=True, padx=6, pady=6); self.history_tree = tree
        btn_clear = ttk.Button(hist, text="Clear", command=self.clear_history); btn_clear.pack(anchor="e", padx=6, pady=(0, 6))

        tk.Label(self, textvariable=self.status_var, anchor="w", bg="#f4f6f8").pack(fill="x", side="bottom")

    # -------- Actions --------
    def generate(self):
        fixed = parse_numbers(self.fixed_var.get())
        excluded = set(parse_numbers(self.exclude_var.get()))
        filters = {k: v.get() for k, v in self.filter_vars.items()}
        total = draws_for(self.exhaustive_var.get())
        weighted = self.weighted_var.get()

        self.cancel_event = threading.Event()
        self.btn_generate.configure(state="disabled"); self.btn_cancel.configure(state="normal")
        self.progress["value"] = 0; self.phase_var.set("Starting...")
        self.set_status(f"Scoring {total:,} candidates...")
        args = (total, filters, fixed, excluded, weighted, self.cancel_event)
        threading.Thread(target=self._search_worker, args=args, daemon=True).start()

    def _search_worker(self, total, filters, fixed, excluded, weighted, cancel):
        try:
            outcome = run_search(total, filters, fixed, excluded, weighted,
                                 progress_cb=lambda p: self.after(0, self._on_progress, p), cancel=cancel)
        except Exception as e:
            log.exception("Search failed")
            self.after(0, self._on_error, e); return
        self.after(0, self._on_done, outcome)

    def _on_progress(self, p):
        self.progress["value"] = p.percent
        self.phase_var.set(f"{p.phase} ({p.processed:,}/{p.total:,})")

    def _on_done(self, outcome):
        self.btn_generate.configure(state="normal"); self.btn_cancel.configure(state="disabled")
        self.phase_var.set("")
        if outcome.status == CONFIG_ERROR:
            messagebox.showerror("Invalid numbers", outcome.message); self.set_status("Run rejected."); return
        if outcome.cancelled and not outcome.ok:
            self.set_status(outcome.message); return
        if not outcome.ok:
            messagebox.showwarning("No result", outcome.message); self.set_status("No candidate found."); return
        best = outcome.best
        self.current = best.numbers
        self.render_balls(best.numbers)
        m = describe(best.numbers)
        self.stats_var.set(f"Sum: {m['sum']} | AC: {m['ac']} | Odd:Even {m['odd_even']} | Low:High {m['low_high']} | Score: {best.display_score}")
        report = evaluate(best.numbers)
        self.report_var.set("   ".join(f"{'✔' if ok else '✘'} {FILTER_LABELS[k]}" for k, ok in report.items()))
        try:
            self.history.append(best.numbers)
        except OSError as e:
            log.warning("Could not save history: %s", e)
            self.set_status(f"Generated, but history was not saved: {e}")
        else:
            self.set_status(f"Best of {outcome.processed:,} draws{' (cancelled)' if outcome.cancelled else ''}.")
        self.refresh_history_view()

    def _on_error(self, e):
        self.btn_generate.configure(state="normal"); self.btn_cancel.configure(state="disabled")
        messagebox.showerror("Error", f"Generation failed: {e}"); self.set_status("Generation failed.")

    def cancel(self):
        if self.cancel_event: self.cancel_event.set()
        self.set_status("Cancelling after the current batch...")

    def render_balls(self, numbers):
        c = self.canvas; c.delete("all")
        size, gap = 56, 14
        width = c.winfo_width() or 700
        x = max(8, (width - len(numbers) * (size + gap)) // 2)
        for n in numbers:
            c.create_oval(x, 16, x + size, 16 + size, fill=ball_color(n), outline="")
            c.create_text(x + size / 2, 16 + size / 2, text=str(n), fill="white", font=("Segoe UI", 16, "bold"))
            x += size + gap

    def copy_current(self):
        if not self.current: return
        self.clipboard_clear(); self.clipboard_append(" ".join(f"{n:02d}" for n in self.current))
        self.set_status("Copied line to clipboard")

    def refresh_history_view(self):
        tree = self.history_tree
        for item in tree.get_children(): tree.delete(item)
        for rec in self.history.records:
            tree.insert("", "end", values=(rec.timestamp, " ".join(f"{n:02d}" for n in rec.numbers)))

    def clear_history(self):
        if not self.history.records: return
        if not messagebox.askyesno("Clear history", "Remove all saved lines?"): return
        try:
            self.history.clear()
        except OSError as e:
            messagebox.showerror("History", f"Could not clear history: {e}"); return
        self.refresh_history_view(); self.set_status("History cleared.")

    def check_latest(self):
        if not self.current:
            messagebox.showinfo("Nothing to check", "Generate a line first."); return
        self.set_status("Fetching latest draw...")
        threading.Thread(target=self._draw_worker, args=(self.current,), daemon=True).start()

    def _draw_worker(self, numbers):
        try:
            draw, source = fetch_latest_draw(progress_cb=lambda m: self.after(0, self.set_status, m))
        except Exception:
            log.exception("Draw lookup failed")
            draw, source = None, "none"
        self.after(0, self._on_draw, numbers, draw, source)

    def _on_draw(self, numbers, draw, source):
        if draw is None:
            messagebox.showwarning("Latest draw", "Could not reach the official results."); self.set_status("Draw lookup failed."); return
        res = check_ticket(numbers, draw)
        lines = [
            f"Round {draw.round} ({draw.date or 'date unknown'}) via {source}",
            f"Winning: {' '.join(map(str, draw.numbers))} + {draw.bonus}",
            f"Matched: {', '.join(map(str, res['matched'])) or 'none'}{' + bonus' if res['bonus_hit'] else ''}",
            f"Result: {RANK_NAMES[res['rank']] + ' prize' if res['rank'] else 'no prize'}",
        ]
        messagebox.showinfo("Latest draw", "\n".join(lines))
        self.set_status(f"Checked against round {draw.round}.")

    def set_status(self, txt):
        self.status_var.set(txt)


def main():
    setup_logging()
    app = LottoProApp(); app.mainloop()

if __name__ == "__main__":
    main()
