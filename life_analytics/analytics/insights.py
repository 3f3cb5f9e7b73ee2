"""Rule-based suggestions for a single day's record."""

from __future__ import annotations

from dataclasses import dataclass

from .records import DailyRecord, FoodType

GOOD = "good"
NEUTRAL = "neutral"
BAD = "bad"


@dataclass(frozen=True)
class Suggestion:
    severity: str  # GOOD | NEUTRAL | BAD
    title: str
    message: str


def suggestions(record: DailyRecord) -> list[Suggestion]:
    """Apply every threshold rule to the record and return all that match.

    Rules are independent: one day can yield good and bad suggestions at the
    same time. Output follows the order sleep, activity, screen time, water,
    steps, food, energy/mood, work share.
    """
    out: list[Suggestion] = []

    sleep = record.sleep_hours
    if sleep < 6:
        out.append(Suggestion(BAD, "Not Enough Sleep",
                              f"You slept {sleep:.1f}h. Aim for 7-9 hours to recover properly."))
    elif 7 <= sleep <= 9:
        out.append(Suggestion(GOOD, "Great Sleep",
                              f"{sleep:.1f}h of sleep is right in the healthy range."))
    elif sleep > 9:
        out.append(Suggestion(NEUTRAL, "Oversleeping",
                              f"{sleep:.1f}h is more than usual. Too much sleep can leave you groggy."))

    activity = record.physical_activity_minutes
    if activity < 20:
        out.append(Suggestion(BAD, "Move More",
                              f"Only {activity} min of activity. Even a short walk helps."))
    elif activity >= 30:
        out.append(Suggestion(GOOD, "Active Day",
                              f"{activity} min of activity meets the daily recommendation."))

    screen = record.screen_time_hours
    if screen > 6:
        out.append(Suggestion(BAD, "High Screen Time",
                              f"{screen:.1f}h of screen time. Try screen-free breaks."))
    elif screen <= 4:
        out.append(Suggestion(GOOD, "Healthy Screen Time",
                              f"{screen:.1f}h of screen time keeps your eyes and sleep happy."))

    water = record.water_glasses
    if water < 6:
        out.append(Suggestion(BAD, "Drink More Water",
                              f"{water:g} glasses today. Aim for at least 8."))
    elif water >= 8:
        out.append(Suggestion(GOOD, "Well Hydrated",
                              f"{water:g} glasses of water. Nice work staying hydrated."))

    steps = record.steps_thousands
    if steps < 7:
        out.append(Suggestion(BAD, "Low Step Count",
                              f"{steps:g}k steps. Try to reach at least 7k."))
    elif steps >= 10:
        out.append(Suggestion(GOOD, "Step Goal Reached",
                              f"{steps:g}k steps. You hit the 10k mark."))

    if record.food_type in (FoodType.FAST_FOOD, FoodType.SKIPPED):
        verb = "skipped meals" if record.food_type is FoodType.SKIPPED else "ate fast food"
        out.append(Suggestion(BAD, "Nutrition Check",
                              f"You {verb} today. Plan a balanced meal for tomorrow."))
    elif record.food_type is FoodType.HEALTHY:
        out.append(Suggestion(GOOD, "Healthy Eating",
                              "You ate healthy today. Keep fuelling your body well."))

    if record.energy <= 2 or record.mood <= 2:
        out.append(Suggestion(BAD, "Low Energy or Mood",
                              "Rough day. Rest, get outside, or talk to someone you trust."))
    elif record.energy >= 4 and record.mood >= 4:
        out.append(Suggestion(GOOD, "Feeling Great",
                              "High energy and good mood. Note what made today work."))

    tracked = (
        record.work_time_hours + record.personal_time_hours
        + record.social_time_hours + record.rest_time_hours
    )
    if tracked > 0:
        work_pct = record.work_time_hours / tracked * 100
        if work_pct > 60:
            out.append(Suggestion(BAD, "Work Overload",
                                  f"Work took {work_pct:.0f}% of your tracked time. Make room for rest."))
        elif 30 <= work_pct <= 50:
            out.append(Suggestion(GOOD, "Balanced Day",
                                  f"Work was {work_pct:.0f}% of your tracked time. A healthy balance."))

    return out
