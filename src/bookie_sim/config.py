"""Static simulation configuration constants."""

STARTING_BANKROLL = 10_000
STARTING_ENERGY = 3
MAX_ENERGY = 10
MIN_BET = 50
MAX_BET_MULTIPLIER = 0.1
JUICE = 0.1
BANKRUPTCY_THRESHOLD = 500
WIN_THRESHOLD = 100_000
HEAT_THRESHOLD = 100
GAME_DAY = 7
MAX_DEBTS = 4

HOME_ADVANTAGE = 3.0
VALUE_THRESHOLD = 1.5
NEWS_REVEAL_DAYS = (1, 3, 5)

# Day-to-day recovery.
DAILY_ENERGY_GAIN = 4
DAILY_HEAT_DECAY = 10
REST_ENERGY_GAIN = 3

# Direct debt collection.
COLLECT_ENERGY_COST = 1
COLLECT_BASE_CHANCE = 0.80
COLLECT_CHANCE_PER_ATTEMPT = 0.05
COLLECT_MAX_CHANCE = 0.95
COLLECT_HEAT = 2

# Non-payer popup branches.
PRESSURE_ENERGY_COST = 1
PRESSURE_HEAT = 5
PRESSURE_PAY_CHANCE = 0.80
ENFORCE_ENERGY_COST = 2
ENFORCE_HEAT = 15

# Mission magnitudes.
COLLECT_MISSION_RISK = 0.05
COLLECT_MISSION_HEAT = 5
COLLECT_MISSION_FAILURE_HEAT = 15
RECRUIT_ENERGY_COST = 2
RECRUIT_WHALE_MONEY_COST = 100
RECRUIT_FAILURE_HEAT = 5
RECRUIT_RISK: dict[str, float] = {"square": 0.10, "sharp": 0.10, "whale": 0.10, "deadbeat": 0.30}
RECRUIT_POOL: tuple[str, ...] = ("square", "square", "sharp", "whale", "deadbeat")
SCHMOOZE_ENERGY_COST = 1
SCHMOOZE_MONEY_COST: dict[str, int] = {"square": 50, "sharp": 50, "whale": 200, "deadbeat": 50}
SCHMOOZE_RELIABILITY_GAIN = 0.1
SCHMOOZE_MAX_BET_MULT = 1.25
SCHMOOZE_TARGETS = 2
SCOUT_ENERGY_COST = 2
HEDGE_ENERGY_COST = 1
HEDGE_MIN_ACTION = 500
HEDGE_MIN_IMBALANCE = 0.20
HEDGE_VIG = 0.10
HEDGE_RISK = 0.05
HEDGE_DAYS = (2, 3, 4, 5, 6)
FIX_ENERGY_COST = 4
FIX_MONEY_COST = 2_500
FIX_MIN_ACTION = 1_000
FIX_RISK = 0.15
FIX_HEAT = 35
FIX_FAILURE_HEAT = 20
FIX_DAYS = (5, 6)

# (threshold, title, description, location, energy, money, risk, heat)
HEAT_MISSIONS: tuple[tuple[int, str, str, str, int, int, float, int], ...] = (
    (20, "Lay low", "Stay home and keep a low profile. Reduce police attention.", "Home", 1, 0, 0.0, -10),
    (40, "Grease some palms", "Pay off a contact to make some attention go away.", "Downtown", 1, 500, 0.10, -25),
    (60, "Get out of town", "Take a quick trip until things cool down.", "Out of Town", 2, 1000, 0.0, -40),
)

LOCATIONS: tuple[str, ...] = (
    "Downtown Bar",
    "Sports Bar",
    "Pool Hall",
    "Poker Room",
    "Country Club",
    "Warehouse District",
    "Industrial Park",
    "The Docks",
)

RECRUIT_LOCATIONS: dict[str, tuple[str, ...]] = {
    "square": ("Downtown Bar", "Sports Bar", "Country Club"),
    "sharp": ("Poker Room", "Country Club"),
    "whale": ("Country Club", "Poker Room"),
    "deadbeat": ("Pool Hall", "The Docks", "Warehouse District"),
}

# Per-archetype uniform ranges: reliability, sharpness, favorites bias, bankroll, max bet % of bankroll.
CUSTOMER_TEMPLATES: dict[str, dict[str, tuple[float, float]]] = {
    "square": {
        "reliability": (0.95, 1.0),
        "sharpness": (0.1, 0.3),
        "favorites_bias": (0.6, 0.9),
        "bankroll": (500, 2000),
        "max_bet_pct": (0.1, 0.2),
    },
    "sharp": {
        "reliability": (1.0, 1.0),
        "sharpness": (0.7, 0.95),
        "favorites_bias": (0.4, 0.6),
        "bankroll": (2000, 10000),
        "max_bet_pct": (0.15, 0.3),
    },
    "whale": {
        "reliability": (0.95, 1.0),
        "sharpness": (0.3, 0.6),
        "favorites_bias": (0.4, 0.6),
        "bankroll": (10000, 50000),
        "max_bet_pct": (0.2, 0.4),
    },
    "deadbeat": {
        "reliability": (0.75, 0.9),
        "sharpness": (0.2, 0.5),
        "favorites_bias": (0.5, 0.7),
        "bankroll": (200, 1000),
        "max_bet_pct": (0.3, 0.5),
    },
}

BET_CHANCE: dict[str, float] = {"square": 0.7, "sharp": 0.7, "whale": 0.5, "deadbeat": 0.7}

STARTING_ROSTER: tuple[str, ...] = ("square", "square", "square", "square", "square", "sharp", "whale")

# (city, nickname, abbreviation, offense, defense, consistency)
TEAM_TABLE: tuple[tuple[str, str, str, int, int, int], ...] = (
    ("Metro", "Tigers", "MET", 85, 78, 70),
    ("Bay City", "Bears", "BAY", 72, 82, 80),
    ("Riverside", "Rockets", "RIV", 90, 65, 55),
    ("Summit", "Storm", "SUM", 68, 88, 85),
    ("Harbor", "Hawks", "HAR", 75, 75, 75),
    ("Valley", "Vipers", "VAL", 82, 70, 60),
    ("Capital", "Crushers", "CAP", 78, 80, 72),
    ("Lakeside", "Lions", "LAK", 70, 72, 90),
)

# Headline templates with home-line impact when the news concerns the home team.
NEWS_TEMPLATES: dict[str, tuple[tuple[str, float], ...]] = {
    "injury": (
        ("{team} star QB questionable with shoulder injury", -3.0),
        ("{team} starting RB ruled out with hamstring", -2.0),
        ("{team} top receiver dealing with ankle sprain", -1.5),
        ("{team} defensive captain limited in practice", -1.0),
    ),
    "return": (
        ("{team} star player cleared to play Sunday", 2.5),
        ("{team} key defender returns from suspension", 1.5),
        ("{team} gets reinforcements back from IR", 2.0),
    ),
    "weather": (
        ("Heavy rain expected for {team} home game", -1.0),
        ("Wind advisory for {team} stadium Sunday", -0.5),
        ("Perfect conditions forecast for {location}", 0.5),
    ),
    "motivation": (
        ("{team} fired up after last week's loss", 1.0),
        ("{team} looking ahead to rivalry game next week", -1.5),
        ("{team} coach gives impassioned speech to media", 0.5),
    ),
    "rest": (
        ("{team} well-rested after bye week", 1.5),
        ("{team} playing third road game in a row", -1.0),
        ("{team} dealing with short week after Monday game", -1.5),
    ),
}
