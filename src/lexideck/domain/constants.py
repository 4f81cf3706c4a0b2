"""Centralized constants for the lexideck application.

All scheduling heuristics and configuration defaults live here so every
layer imports from a single source of truth.
"""

# ---------- Time units (milliseconds) ----------
ONE_MINUTE_MS = 60 * 1000
ONE_HOUR_MS = 60 * ONE_MINUTE_MS
ONE_DAY_MS = 24 * ONE_HOUR_MS

# ---------- Progress keys ----------
REVERSE_KEY_SUFFIX = "_rev"

# ---------- Interval recalculation ----------
FAIL_INTERVAL_MINUTES = 1
HARD_INTERVAL_MINUTES = 5
GOOD_FIRST_INTERVAL_HOURS = 12
GOOD_SECOND_INTERVAL_DAYS = 3
GOOD_GROWTH_BASE = 1.8
EASY_FIRST_INTERVAL_DAYS = 3
EASY_GROWTH_BASE = 2.5
MAX_INTERVAL_DAYS = 36_500

# ---------- Next-item selection ----------
MAX_ACTIVE_LEARNING_ITEMS = 50

# ---------- Catalog ----------
ITEM_ID_LENGTH = 16
DEFAULT_FRONT_COLUMN = 1  # Column B: prompt language
DEFAULT_BACK_COLUMN = 0  # Column A: answer language
REQUEST_TIMEOUT = 30.0

# Used when no catalog source is configured.
SAMPLE_CATALOG_CSV = """French,Thai
Bonjour,สวัสดี
Merci,ขอบคุณ
Oui,ใช่
Non,ไม่
"""
