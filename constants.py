MOVE_ACTION = "move"
SWITCH_ACTION = "switch"

PHYSICAL = "physical"
SPECIAL = "special"
STATUS = "status"

# non-volatile status conditions
SLEEP = "sleep"
PARALYSIS = "paralysis"
BURN = "burn"
POISON = "poison"
TOXIC = "toxic"
FREEZE = "freeze"
CONFUSION = "confusion"

HITPOINTS = "hp"
ATTACK = "atk"
DEFENSE = "def"
SPECIAL_ATTACK = "spa"
SPECIAL_DEFENSE = "spd"
SPEED = "spe"
STAT_KEYS = (HITPOINTS, ATTACK, DEFENSE, SPECIAL_ATTACK, SPECIAL_DEFENSE, SPEED)

DEFAULT_LEVEL = 100
DEFAULT_IV = 31
DEFAULT_EV = 0
DEFAULT_NATURE = "hardy"

# damage rolls
MIN_ROLL = 0.85
MAX_ROLL = 1.0
DAMAGE_ROLL_STEPS = 16
STAB_MULTIPLIER = 1.5
CRIT_MULTIPLIER = 1.5

SWITCH_PRIORITY = 6

# status engine odds (normal mode)
FREEZE_THAW_CHANCE = 0.2
FULL_PARALYSIS_CHANCE = 0.25
CONFUSION_SELF_HIT_CHANCE = 0.33
CONFUSION_SELF_HIT_FRACTION = 0.1
MAX_SLEEP_TURNS = 3
MAX_CONFUSION_TURNS = 4

# luck applied to a combatant's status checks
NORMAL_LUCK = "normal"
WORST_LUCK = "worst"
BEST_LUCK = "best"

# event types
EVENT_SWITCH = "switch"
EVENT_SWITCH_FAIL = "switch-fail"
EVENT_MOVE_USE = "move-use"
EVENT_MOVE = "move"
EVENT_FAINT = "faint"
EVENT_STATUS = "status"
EVENT_STATUS_FAIL = "status-fail"
EVENT_STATUS_PREVENT = "status-prevent"
EVENT_STATUS_CURE = "status-cure"
EVENT_CONFUSION = "confusion"
EVENT_CONFUSION_DAMAGE = "confusion-damage"
EVENT_CONFUSION_END = "confusion-end"
EVENT_ACCURACY_RISK = "accuracy-risk"
EVENT_BURN_DAMAGE = "burn-damage"
EVENT_POISON_DAMAGE = "poison-damage"
EVENT_TOXIC_DAMAGE = "toxic-damage"

# run & bun AI scoring
AI_STATUS_MOVE_SCORE = 6
AI_HIGHEST_DAMAGE_SCORE = 6
AI_HIGHEST_DAMAGE_LUCKY_SCORE = 8
AI_HIGHEST_DAMAGE_LUCKY_CHANCE = 0.2
AI_FAST_KILL_BONUS = 6
AI_SLOW_KILL_BONUS = 3
AI_BOOST_ABILITY_BONUS = 1
AI_PRIORITY_EMERGENCY_BONUS = 11
AI_HIGH_CRIT_BONUS = 1
AI_HIGH_CRIT_CHANCE = 0.5

# position evaluation weights
ALIVE_WEIGHT = 5000
GUARANTEED_KO_BONUS = 10000
ENEMY_KO_THREAT_PENALTY = 3000
HP_FRACTION_WEIGHT = 500
MATCHUP_WEIGHT = 100

INVALID_SWITCH_SCORE = -999

# tiered search
MAX_ACCEPTABLE_LOSSES = 5
DEFAULT_MAX_DEPTH = 20
DEFAULT_LOOKAHEAD_DEPTH = 2
DEFAULT_SEARCH_TIMEOUT_S = 30.0
PRUNE_DAMAGE_RATIO = 0.95
DEFENSIVE_SWITCH_RATIO = 0.7
RISKY_SWITCH_PERCENT = 90
SAFE_SWITCH_PERCENT = 70
THREATEN_FRACTION = 0.25

RISKLESS = "RISKLESS"
RISKY = "RISKY"
SACRIFICE = "SACRIFICE"
HIGH_RISK = "HIGH RISK"
UNLIKELY_WIN = "UNLIKELY WIN"
GUARANTEED_LOSS = "GUARANTEED LOSS"
LOSS_RISK = "LOSS RISK"
INCONCLUSIVE = "INCONCLUSIVE"

# risk levels
LOW_RISK = "low"
MEDIUM_RISK = "medium"
HIGH_RISK_LEVEL = "high"
AI_ODDS_SIMULATIONS = 1000
