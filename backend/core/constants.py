"""
Shared constants.

This module has no dependencies on models or services to avoid circular imports.
"""

# Persisted state keys (one logical store)
WORKOUT_HISTORY_KEY = "workout_history"
WORKOUT_STREAK_KEY = "workout_streak"
WORKOUT_STATS_KEY = "workout_stats"
# {programs: [...], activeProgramId}
WORKOUT_PROGRAMS_KEY = "workout_programs"
SNAPSHOT_KEYS = (
    WORKOUT_HISTORY_KEY,
    WORKOUT_STREAK_KEY,
    WORKOUT_STATS_KEY,
    WORKOUT_PROGRAMS_KEY,
)

# Phase plan length (independent of the schedule cycle length)
DEFAULT_PHASE_TOTAL_WEEKS = 16

# Reflection limits enforced by request models
MAX_REFLECTION_TAGS = 3
MIN_EFFORT = 1
MAX_EFFORT = 10
MAX_NOTES_LENGTH = 2000

SKIP_REASONS = (
    "tired",
    "sore",
    "sick",
    "busy",
    "travel",
    "injury",
    "weather",
    "no_motivation",
    "time",
    "mental_health",
    "other",
)
