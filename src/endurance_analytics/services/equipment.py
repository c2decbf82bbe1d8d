"""Race equipment checklist and race-week logistics timeline."""

from datetime import date, timedelta
from typing import List, Optional, Tuple

from ..models.race_plan import (
    ChecklistCategory,
    EquipmentItem,
    EquipmentPlan,
    RaceConditions,
    RaceDistance,
    RacePlanChecklist,
    RaceWeekTimeline,
    WaterType,
    WindCondition,
    is_long_course,
)


SWIM = ChecklistCategory.SWIM
BIKE = ChecklistCategory.BIKE
RUN = ChecklistCategory.RUN
TRANSITION = ChecklistCategory.TRANSITION
NUTRITION = ChecklistCategory.NUTRITION
SPECIAL_NEEDS = ChecklistCategory.SPECIAL_NEEDS

BASE_CHECKLIST: List[Tuple[str, ChecklistCategory]] = [
    ("Goggles (primary pair)", SWIM),
    ("Goggles (backup pair)", SWIM),
    ("Swim cap (provided at registration)", SWIM),
    ("Anti-chafe / body glide", SWIM),
    ("Timing chip (attached to ankle)", SWIM),
    ("Tri suit / race kit", SWIM),
    ("Bike (cleaned and tuned)", BIKE),
    ("Helmet", BIKE),
    ("Bike shoes", BIKE),
    ("Sunglasses", BIKE),
    ("Water bottles (filled)", BIKE),
    ("Nutrition taped/mounted to frame", BIKE),
    ("Flat repair kit (tube, levers, CO2)", BIKE),
    ("Mini pump", BIKE),
    ("Bike computer (charged)", BIKE),
    ("Run shoes", RUN),
    ("Hat or visor", RUN),
    ("Race belt with bib number", RUN),
    ("Sunscreen", RUN),
    ("Towel (for T1)", TRANSITION),
    ("Body glide / anti-chafe", TRANSITION),
    ("Elastic laces (for quick shoe change)", TRANSITION),
    ("Gels / chews (race quantity)", NUTRITION),
    ("Drink mix (pre-mixed in bottles)", NUTRITION),
    ("Pre-race breakfast food", NUTRITION),
    ("Caffeine (pills or coffee)", NUTRITION),
    ("Electrolyte tabs/salt", NUTRITION),
    ("Recovery drink (post-race)", NUTRITION),
]

LONG_COURSE_ITEMS: List[Tuple[str, ChecklistCategory]] = [
    ("Special needs bag - bike (extra nutrition)", SPECIAL_NEEDS),
    ("Special needs bag - run (extra nutrition)", SPECIAL_NEEDS),
    ("Arm warmers / extra layer (for early morning)", BIKE),
    ("Headlamp or light (if pre-dawn start)", TRANSITION),
    ("Change of clothes (drop bag)", TRANSITION),
]


def generate_checklist(
    distance: RaceDistance,
    conditions: Optional[RaceConditions] = None,
) -> List[EquipmentItem]:
    """
    Categorized equipment checklist.

    A wetsuit is listed unless the swim is explicitly wetsuit-illegal;
    ocean swims add earplugs, long course adds special-needs bags and
    early-morning gear, and strong wind adds a disc cover.
    """
    items = []
    if conditions is None or conditions.wetsuit_legal is not False:
        items.append(EquipmentItem(name="Wetsuit (check water temp rules)", category=SWIM))
    items.extend(EquipmentItem(name=name, category=category) for name, category in BASE_CHECKLIST)

    if conditions is not None and conditions.water_type == WaterType.OCEAN:
        items.append(EquipmentItem(name="Earplugs (ocean swim)", category=SWIM))

    if is_long_course(distance):
        items.extend(EquipmentItem(name=name, category=category) for name, category in LONG_COURSE_ITEMS)

    if conditions is not None and conditions.wind == WindCondition.STRONG:
        items.append(EquipmentItem(name="Deep section wheel cover / disc cover", category=BIKE))

    return items


def generate_timeline(
    distance: RaceDistance,
    race_date: Optional[date] = None,
) -> List[RaceWeekTimeline]:
    """
    Race-week timeline at 7, 3, 1 and 0 days out.

    Args:
        distance: Race distance
        race_date: When known, each entry carries its calendar date

    Returns:
        Timeline entries ordered from one week out to race morning
    """
    long_course = is_long_course(distance)
    entries = [
        (7, "1 Week Out", [
            "Begin taper: reduce volume by 40-60%, maintain intensity",
            "Finalize race nutrition plan",
            "Test all gear in a short brick workout",
            "Confirm travel and accommodation",
        ]),
        (3, "3 Days Out", [
            "Short easy workouts only (20-30 min)",
            "Begin carb loading" + (" (8-12g/kg/day)" if long_course else ""),
            "Lay out all race gear using the checklist",
            "Review the race course map and plan",
        ]),
        (1, "Day Before", [
            "Bike check-in and transition area setup",
            "Packet pickup and athlete briefing",
            "Course familiarization (drive or walk)",
            "Simple dinner, nothing new or heavy",
            "Set 2 alarms for race morning",
            "Lay out race morning clothes and breakfast",
        ]),
        (0, "Race Morning", [
            f"Wake up {'3-3.5' if long_course else '2.5-3'} hours before start",
            "Eat pre-race meal (practiced in training)",
            "Caffeine 60-90 min before start",
            f"Arrive at venue {'90' if long_course else '60'} min before start",
            "Set up transition area",
            "Quick body marking if needed",
            "10-min warm-up (light jog + arm swings)",
            "Final bathroom stop",
            "Wetsuit on 15 min before start",
        ]),
    ]

    return [
        RaceWeekTimeline(
            days_out=days_out,
            label=label,
            tasks=tasks,
            date=race_date - timedelta(days=days_out) if race_date else None,
        )
        for days_out, label, tasks in entries
    ]


def generate_equipment_plan(
    distance: RaceDistance,
    conditions: Optional[RaceConditions] = None,
    race_date: Optional[date] = None,
) -> EquipmentPlan:
    return EquipmentPlan(
        checklist=generate_checklist(distance, conditions),
        race_week_timeline=generate_timeline(distance, race_date),
    )


def build_checklist_rows(plan_id: str, equipment: EquipmentPlan) -> List[RacePlanChecklist]:
    """Unchecked checklist rows for the persistence collaborator to store."""
    return [
        RacePlanChecklist(
            race_plan_id=plan_id,
            item_name=item.name,
            category=item.category,
        )
        for item in equipment.checklist
    ]
