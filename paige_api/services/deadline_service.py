# paige_api/services/deadline_service.py
from datetime import datetime, timedelta
from typing import Optional, Tuple

from paige_api.utils.dates import get_utc_now, format_canonical, parse_canonical

TIGHT_TIMELINE_DAYS = 90

# (exclusive upper index, days from now on a normal timeline, extra days on a tight timeline)
# Phases after "Tighten Up" are anchored on the wedding date instead of today.
PLANNING_PHASES = [
    (5, 7, 1),     # Kickoff
    (9, 21, 3),    # Lock venue + date
    (13, 240, 7),  # Core team
    (16, 200, 14), # Looks + attire
    (21, 150, 21), # Food + flow
    (25, 120, 28), # Paper + details
    (30, 90, 35),  # Send + finalize
    (35, 45, 42),  # Tighten up
]
WEEK_OF_END = 40
DAY_BEFORE_END = 43
WEDDING_DAY_END = 47
AFTER_END = 56

MORNING_KEYWORDS = ("budget", "define", "research", "browse", "shortlist")
AFTERNOON_KEYWORDS = ("venue", "vendor", "photographer", "caterer", "hire", "book")
EVENING_KEYWORDS = ("attire", "guest", "invitation", "personal", "dress", "suit")
ROTATING_SLOTS = [(9, 0), (9, 30), (10, 0), (14, 0), (14, 30), (19, 0), (19, 30)]


def time_of_day(title: str, index: int) -> Tuple[int, int]:
    lowered = title.lower()
    if any(word in lowered for word in MORNING_KEYWORDS):
        return 9, 30
    if any(word in lowered for word in AFTERNOON_KEYWORDS):
        return 14, 0
    if any(word in lowered for word in EVENING_KEYWORDS):
        return 19, 0
    return ROTATING_SLOTS[index % len(ROTATING_SLOTS)]


def _anchored_on_wedding(index: int, wedding: datetime, tight: bool) -> datetime:
    if index < WEEK_OF_END:
        days_before = (WEEK_OF_END - index) if tight else 14
        return wedding - timedelta(days=days_before)
    if index < DAY_BEFORE_END:
        return wedding - timedelta(days=1)
    if index < WEDDING_DAY_END:
        return wedding
    if index < AFTER_END:
        return wedding + timedelta(days=(index - WEDDING_DAY_END) // 2 + 1)
    return wedding + timedelta(days=7)


def compute_deadline(index: int, title: str, wedding: datetime, now: Optional[datetime] = None) -> datetime:
    """
    Deadline for the checklist item at `index`, scheduled by planning phase.

    Weddings less than 90 days out get a compressed schedule that starts
    tomorrow. Only post-wedding items, by phase or by title, may land after the wedding.
    """
    now = now or get_utc_now()
    days_until_wedding = (wedding - now).total_seconds() / 86400
    tight = days_until_wedding < TIGHT_TIMELINE_DAYS

    deadline = None
    for phase_end, normal_days, tight_offset in PLANNING_PHASES:
        if index < phase_end:
            days = (index + tight_offset) if tight else normal_days
            deadline = now + timedelta(days=days)
            break
    if deadline is None:
        deadline = _anchored_on_wedding(index, wedding, tight)

    post_wedding = WEDDING_DAY_END <= index < AFTER_END or "after" in title.lower()
    if deadline > wedding and not post_wedding:
        deadline = wedding - timedelta(days=1)

    hours, minutes = time_of_day(title, index)
    return deadline.replace(hour=hours, minute=minutes, second=0, microsecond=0)


def deadline_reasoning(index: int, title: str) -> str:
    lowered = title.lower()
    if "budget" in lowered or "define" in lowered:
        return "Budget planning should be done early to guide all other decisions"
    if "venue" in lowered:
        return "Venue booking is critical and should be prioritized early in planning"
    if "photographer" in lowered or "hire" in lowered:
        return "Photographer booking requires early planning due to high demand"
    if "attire" in lowered or "dress" in lowered:
        return "Attire selection takes time for fittings and alterations"
    if "invitation" in lowered or "send" in lowered:
        return "Invitations need time for design, printing, and mailing"
    if "week of" in lowered or "day before" in lowered:
        return "Final preparations scheduled close to wedding date"
    if "after" in lowered:
        return "Post-wedding tasks scheduled after the big day"
    if index < 5:
        return "Kickoff task scheduled early in planning process"
    if index < 13:
        return "Core planning task scheduled based on wedding timeline"
    if index < 21:
        return "Mid-planning task scheduled for optimal timing"
    if index < 30:
        return "Final planning task scheduled closer to wedding date"
    return "Task scheduled based on optimal wedding planning timeline"


def schedule(index: int, title: str, wedding_date: str, now: Optional[datetime] = None) -> Tuple[Optional[str], Optional[str]]:
    """Returns (deadline, reasoning) for one item, or (None, None) if the date does not parse."""
    wedding = parse_canonical(wedding_date)
    if wedding is None:
        return None, None
    return format_canonical(compute_deadline(index, title, wedding, now)), deadline_reasoning(index, title)
