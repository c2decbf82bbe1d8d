"""Race mindset guidance selected by goal, distance and classification."""

from typing import Dict, List, Optional

from ..models.race_plan import (
    AthleteClassification,
    GoalType,
    MindsetPlan,
    RaceDistance,
    is_draft_legal,
    is_long_course,
)


BASE_MANTRAS = [
    "Smooth is fast. Relax the shoulders.",
    "I have done the work. My body is ready.",
]

_PODIUM_MANTRAS = [
    "Race my race. Let them come to me.",
    "Discipline over emotion. Stick to the numbers.",
    "I earned this spot. Now I take it.",
]
_IRONMAN_QUALIFY_MANTRAS = [
    "Every second counts. Stay locked in.",
    "I am prepared. I am relentless.",
    "This is my moment. Seize it.",
]
_WT_QUALIFY_MANTRAS = [
    "Execute. Compete. Qualify.",
    "I belong on this start line.",
]

GOAL_MANTRAS: Dict[GoalType, List[str]] = {
    GoalType.FINISH: [
        "One stroke, one pedal, one step at a time.",
        "I am stronger than I think.",
        "Forward is a pace. Keep moving.",
    ],
    GoalType.PR: [
        "Trust the plan. Execute the process.",
        "Discomfort is temporary. A new PR is forever.",
        "This is what I trained for.",
    ],
    GoalType.AG_PODIUM: _PODIUM_MANTRAS,
    GoalType.AG_WIN: _PODIUM_MANTRAS,
    GoalType.QUALIFY_IM_KONA: _IRONMAN_QUALIFY_MANTRAS,
    GoalType.QUALIFY_IM_703_WORLDS: _IRONMAN_QUALIFY_MANTRAS,
    GoalType.QUALIFY_WT_AG_WORLDS: _WT_QUALIFY_MANTRAS,
    GoalType.QUALIFY_USAT_NATIONALS: _WT_QUALIFY_MANTRAS,
    GoalType.LEGACY_QUALIFICATION: [
        "12 finishes. Each one a chapter. This is the next.",
        "Consistency is my superpower.",
    ],
    GoalType.WIN_PODIUM: [
        "I race to win. No hesitation.",
        "Attack when strong. Endure when tested.",
    ],
    GoalType.PRO_CARD_QUALIFICATION: [
        "Today I earn it. No one gives it away.",
        "Push through the line.",
    ],
    GoalType.IM_PRO_SLOT: [
        "This is business. Execute the plan.",
        "Every watt, every second matters.",
    ],
    GoalType.PTO_RANKING_POINTS: ["Rankings are built race by race. This one counts."],
    GoalType.WT_SERIES_POINTS: ["Smart racing. Position. Execute."],
    GoalType.PRIZE_MONEY: ["Race smart. Finish strong. Cash the check."],
    GoalType.COURSE_RECORD: [
        "Leave nothing on the course.",
        "Pain is temporary. Records are permanent.",
    ],
}

BASE_PROCESS_GOALS = [
    "Execute nutrition plan without deviation",
    "Hit target pacing for each segment",
    "Stay calm through transitions, no rushing",
    "Check in with body at each aid station",
]

_PODIUM_PROCESS_GOALS = [
    "Race your own plan regardless of competitors",
    "Execute T1 and T2 in under target time",
    "Strong finish: empty the tank in the last 20%",
]
_QUALIFY_PROCESS_GOALS = [
    "Every minute matters, no wasted time",
    "Execute a perfect nutrition strategy",
    "Mental reset at each sport change",
]

GOAL_PROCESS_GOALS: Dict[GoalType, List[str]] = {
    GoalType.FINISH: [
        "Complete every segment without stopping (walking in run is OK)",
        "Stay positive through the tough patches",
        "Enjoy the atmosphere",
    ],
    GoalType.PR: [
        "Hold power/pace in the second half of the bike",
        "Run a negative or even split",
        "Don't leave time in transitions",
    ],
    GoalType.AG_PODIUM: _PODIUM_PROCESS_GOALS,
    GoalType.AG_WIN: _PODIUM_PROCESS_GOALS,
    GoalType.QUALIFY_IM_KONA: _QUALIFY_PROCESS_GOALS,
    GoalType.QUALIFY_IM_703_WORLDS: _QUALIFY_PROCESS_GOALS,
    GoalType.WIN_PODIUM: [
        "Control the race when possible",
        "Respond to attacks decisively",
        "Save the best effort for the final push",
    ],
    GoalType.PRO_CARD_QUALIFICATION: [
        "Race within 10-15% of the winner",
        "Stay consistent across all three disciplines",
        "Don't blow up on the bike",
    ],
}

DURING_RACE_STRATEGIES = [
    "SEGMENT FOCUS: Break the race into small chunks. Only think about the current segment.",
    "PAIN MANAGEMENT: When it hurts, narrow your focus. Count 10 strokes, 10 pedal strokes, or 10 steps.",
    "SELF-TALK: Catch negative thoughts and replace with action cues (\"smooth and strong\", "
    "\"relax the shoulders\", \"light feet\").",
    "BREATHING RESET: 4-count inhale, 4-count exhale to calm the nervous system.",
    "SMILE: Smiling during hard effort reduces perceived exertion by up to 2%.",
    "AID STATION ROUTINE: Grab, sip, pour (on head if hot), walk 10 steps, resume running.",
]

RACE_WEEK_TIPS = [
    "SLEEP: Prioritize 8+ hours/night. Two nights before the race is the one that counts.",
    "VISUALIZATION: 10 minutes each day mentally walking through the race.",
    "ANXIETY: Reframe nerves as excitement. Your body's stress response is the same.",
    "CONTROLLABLES: Focus on nutrition, pacing, attitude, gear prep. Let go of weather and competitors.",
    "GRATITUDE: Remember why you signed up. Race day is the reward for months of work.",
    "ROUTINE: Keep daily routine as normal as possible. No new foods, stretches, or habits.",
]

DRAFT_LEGAL_PRO_TACTICS = [
    "SWIM POSITIONING: Exit in the front group. Being dropped in the swim can end your race in draft-legal.",
    "PACK RIDING: Sit in the pack, recover on the bike. Don't pull at the front unless tactically necessary.",
    "SURGE RESPONSE: When attacks happen, respond immediately or you'll be gapped. Sit on the wheel.",
    "RUN SETUP: The bike is about conserving energy for the run. The run decides everything in draft-legal.",
    "POSITIONING: Stay in the top 10-15 off the bike. From there you can race the run.",
]

NON_DRAFT_PRO_TACTICS = [
    "EARLY BIKE: Don't chase. Let the rabbits go. Many pros blow up chasing fast starters.",
    "PACING DISCIPLINE: Stick to your power target. The back half of the bike is where you make up places.",
    "NUTRITION EXECUTION: Pros fuel at higher rates (90-120g/hr carbs). Practice this in training.",
    "RUN PATIENCE: The Ironman run is won in miles 18-26. Be patient through mile 15.",
    "RACE INTELLIGENCE: Know the competition. Know when to push and when to sit.",
]


def generate_mantras(goal: GoalType) -> List[str]:
    return BASE_MANTRAS + GOAL_MANTRAS.get(goal, GOAL_MANTRAS[GoalType.FINISH])


def generate_visualization(
    distance: RaceDistance,
    race_name: Optional[str],
    classification: AthleteClassification,
) -> str:
    """Race-day visualization script walking through every segment."""
    long_course = is_long_course(distance)
    draft_legal = is_draft_legal(distance)
    is_pro = classification == AthleteClassification.PROFESSIONAL

    swim_rival = " You see your competitors. You've trained harder." if is_pro else ""
    if draft_legal:
        bike_scene = (
            " You slot into the pack, riding smart, saving energy for the run. "
            "You respond to surges but don't initiate."
        )
    elif long_course:
        bike_scene = (
            " The miles tick by. You fuel on schedule. You stay patient through the "
            "middle miles. Discipline wins in the back half."
        )
    else:
        bike_scene = " You ride steady and strong."

    if long_course:
        run_scene = (
            "Mile by mile, you settle in. You fuel at every aid station. When it gets "
            "hard, you narrow your focus: just the next aid station."
        )
    else:
        run_scene = "Your legs find their rhythm quickly."

    if distance == RaceDistance.IRONMAN:
        finish_scene = 'The announcer says your name: "You are an Ironman!"'
    else:
        finish_scene = "You cross the line with everything you had."

    return "\n\n".join([
        "Close your eyes and take three deep breaths.",
        f"Picture yourself at {race_name or 'the race venue'}. It's race morning. Your gear is "
        "ready, your nutrition is dialed, and your body is tapered and fresh.",
        f"THE SWIM: You walk to the water's edge.{swim_rival} The horn sounds. You find clear "
        "water, settle into your rhythm. Your stroke is smooth and efficient. Breathe, sight, "
        "breathe. You exit the water feeling strong.",
        "T1: You run to your bike. Wetsuit off, helmet on, shoes on, all rehearsed. Smooth "
        "transitions are fast transitions.",
        f"THE BIKE: You mount and find your power.{bike_scene} You approach T2 feeling ready to run.",
        "T2: Bike racked, shoes swapped. Quick and efficient.",
        "THE RUN: The first kilometer feels different off the bike. This is normal. You ease "
        f"into your pace. {run_scene} The finish line comes into view.",
        f"THE FINISH: You hear the crowd. {finish_scene} Pride, relief, joy. You did it.",
        "Open your eyes. That feeling is real. Race day is the celebration of the work.",
    ])


def generate_process_goals(
    goal: GoalType,
    distance: RaceDistance,
    classification: AthleteClassification,
) -> List[str]:
    goals = BASE_PROCESS_GOALS + GOAL_PROCESS_GOALS.get(goal, GOAL_PROCESS_GOALS[GoalType.FINISH])
    if classification == AthleteClassification.PROFESSIONAL and is_draft_legal(distance):
        goals = goals + ["Maintain position in the lead pack on the bike"]
    return goals


def get_pro_tactics(distance: RaceDistance) -> List[str]:
    if is_draft_legal(distance):
        return list(DRAFT_LEGAL_PRO_TACTICS)
    return list(NON_DRAFT_PRO_TACTICS)


def generate_mindset_plan(
    goal: GoalType,
    distance: RaceDistance,
    race_name: Optional[str],
    classification: AthleteClassification = AthleteClassification.AGE_GROUPER,
) -> MindsetPlan:
    """
    Generate mindset guidance.

    Pro tactics are included only for professionals.
    """
    is_pro = classification == AthleteClassification.PROFESSIONAL
    return MindsetPlan(
        mantras=generate_mantras(goal),
        visualization_script=generate_visualization(distance, race_name, classification),
        process_goals=generate_process_goals(goal, distance, classification),
        during_race_strategies=list(DURING_RACE_STRATEGIES),
        race_week_tips=list(RACE_WEEK_TIPS),
        pro_tactics=get_pro_tactics(distance) if is_pro else None,
    )
