from __future__ import annotations


DAILY_SANITY_REWARD = 1
DAILY_SANITY_PENALTY = 1

OBJECTIVE_NOTIFICATION_MS = 3000
STEP_NOTIFICATION_MS = 2000

RITUAL_SITE_RADIUS = 50.0

KILLS_IN_SAME_HOME_TARGET = 3

FALLBACK_OBJECTIVE_TITLE = "Survive the Day"
FALLBACK_OBJECTIVE_DESCRIPTION = "Make it through another day. The voices will guide you."
FALLBACK_OBJECTIVE_XP = 2

DAILY_SEED_NAMESPACE = "objectives.daily"


def reward_text(xp: int) -> str:
    return f"+{max(0, int(xp))} XP, +{DAILY_SANITY_REWARD} Sanity"


def penalty_text() -> str:
    return f"-{DAILY_SANITY_PENALTY} Sanity"
