"""
Constants and shared data for cycle phase services.
"""
from cycle_engine.models.phase import PhaseType, SubPhaseType

# Sub-phases in cycle order, with the coarse phase each belongs to
SUB_PHASE_SEQUENCE = [
    (SubPhaseType.HEAVY_FLOW, PhaseType.MENSTRUAL),
    (SubPhaseType.LIGHT_FLOW, PhaseType.MENSTRUAL),
    (SubPhaseType.EARLY_FOLLICULAR, PhaseType.FOLLICULAR),
    (SubPhaseType.LATE_FOLLICULAR, PhaseType.FOLLICULAR),
    (SubPhaseType.PRE_OVULATION, PhaseType.FERTILE),
    (SubPhaseType.OVULATION, PhaseType.FERTILE),
    (SubPhaseType.POST_OVULATION, PhaseType.FERTILE),
    (SubPhaseType.EARLY_LUTEAL, PhaseType.LUTEAL),
    (SubPhaseType.MID_LUTEAL, PhaseType.LUTEAL),
    (SubPhaseType.PRE_MENSTRUAL, PhaseType.LUTEAL),
]

# Days of heaviest flow at the start of every period
HEAVY_FLOW_DAYS = 2

# Length of the early follicular band after the period ends
EARLY_FOLLICULAR_DAYS = 3

# Fertile days on either side of the ovulation day
PRE_OVULATION_DAYS = 2
POST_OVULATION_DAYS = 2

# Closing days of the cycle counted as pre-menstrual
PRE_MENSTRUAL_DAYS = 3

SUB_PHASE_DETAILS = {
    SubPhaseType.HEAVY_FLOW: {
        "description": "Heavy menstrual flow",
        "emoji": "🩸",
        "hormonal_profile": "Low estrogen & progesterone",
        "recommendations": [
            "Rest and self-care",
            "Gentle movement",
            "Warm compress for cramps",
            "Iron-rich foods"
        ]
    },
    SubPhaseType.LIGHT_FLOW: {
        "description": "Light menstrual flow",
        "emoji": "🩸",
        "hormonal_profile": "Rising estrogen",
        "recommendations": [
            "Light exercise",
            "Hydration focus",
            "Begin energy foods",
            "Gentle stretching"
        ]
    },
    SubPhaseType.EARLY_FOLLICULAR: {
        "description": "Early follicular phase",
        "emoji": "🌱",
        "hormonal_profile": "Gradually rising estrogen",
        "recommendations": [
            "Increase activity",
            "Focus on goals",
            "Social activities",
            "Creative projects"
        ]
    },
    SubPhaseType.LATE_FOLLICULAR: {
        "description": "Late follicular phase",
        "emoji": "🌱",
        "hormonal_profile": "High estrogen, rising energy",
        "recommendations": [
            "Peak performance time",
            "Important decisions",
            "Physical challenges",
            "New initiatives"
        ]
    },
    SubPhaseType.PRE_OVULATION: {
        "description": "Fertile window, approaching ovulation",
        "emoji": "🌸",
        "hormonal_profile": "High estrogen, approaching ovulation",
        "recommendations": [
            "Fertility awareness",
            "Communication focus",
            "Relationship building",
            "Self-confidence peak"
        ]
    },
    SubPhaseType.OVULATION: {
        "description": "Ovulation day",
        "emoji": "🥚",
        "hormonal_profile": "LH surge, peak fertility",
        "recommendations": [
            "Peak intimacy window",
            "High energy activities",
            "Social connections",
            "Important conversations"
        ]
    },
    SubPhaseType.POST_OVULATION: {
        "description": "Fertile window, after ovulation",
        "emoji": "🌸",
        "hormonal_profile": "Estrogen dipping, progesterone starting to rise",
        "recommendations": [
            "Fertility awareness",
            "Wind down intense training",
            "Quality time together",
            "Finish open projects"
        ]
    },
    SubPhaseType.EARLY_LUTEAL: {
        "description": "Early luteal phase",
        "emoji": "🌙",
        "hormonal_profile": "Rising progesterone, stable mood",
        "recommendations": [
            "Steady routines",
            "Detailed tasks",
            "Planning ahead",
            "Nurturing activities"
        ]
    },
    SubPhaseType.MID_LUTEAL: {
        "description": "Mid luteal phase",
        "emoji": "🌙",
        "hormonal_profile": "Peak progesterone",
        "recommendations": [
            "Moderate exercise",
            "Organizational tasks",
            "Meal planning",
            "Relaxation techniques"
        ]
    },
    SubPhaseType.PRE_MENSTRUAL: {
        "description": "Late luteal phase (PMS)",
        "emoji": "🌙",
        "hormonal_profile": "Declining hormones, PMS symptoms",
        "recommendations": [
            "Self-care priority",
            "Stress management",
            "Gentle exercise",
            "Comfort foods in moderation"
        ]
    }
}

# Coefficient-of-variation ceilings for regularity levels, checked in order
REGULARITY_THRESHOLDS = [
    (0.1, "very_regular"),
    (0.2, "regular"),
    (0.3, "somewhat_variable"),
]

# Average cycle lengths outside this range get a dedicated insight
SHORT_CYCLE_THRESHOLD = 25
LONG_CYCLE_THRESHOLD = 32

# Variability below or above these cutoffs gets a dedicated insight
STEADY_VARIABILITY_CUTOFF = 0.15
HIGH_VARIABILITY_CUTOFF = 0.3

# Longest observed flow, in days, that still counts toward the average
MAX_PERIOD_LENGTH = 10
