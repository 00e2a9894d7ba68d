"""
Habit Tracker - Source Package

A single-user habit tracker: define recurring habits, see which are due
today, mark them complete. State lives in a local, swappable store.

DESIGN PRINCIPLES:
1. One explicitly owned store, no global state
2. Pure state transitions, explicit persist step
3. Storage failures degrade, they never crash the UI
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Habit Tracker Team"
