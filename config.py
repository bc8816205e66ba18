#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.
"""

# ── Journey defaults ─────────────────────────────────────────────────────────
DEFAULT_ORIGIN: str = "MG Road"
DEFAULT_DESTINATION: str = "Chord Road Hospital"
DEFAULT_CRITICAL: bool = False
DEFAULT_VEHICLE_ID: str = "AMB_01"

# ── Simulated time ───────────────────────────────────────────────────────────
# Simulated seconds per wall-clock second in the viewer and the demo.
DEFAULT_TIME_SCALE: float = 8.0

# ── Journey bus defaults ─────────────────────────────────────────────────────
BUS_BACKLOG: int = 256

# ── HTTP control API ─────────────────────────────────────────────────────────
API_HOST: str = "0.0.0.0"
API_PORT: int = 5000

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1000
WINDOW_HEIGHT: int = 700
TARGET_FPS: int = 60

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "corridor.log"
MOTION_DEBUG_LOG_FILE: str = "motion_debug.log"
