"""
Pattern Library

Static weighted pattern tables used by the anxiety scorer and the
trigger detector. Pure data: tables are built once at import time
and never mutated.

Tables:
- Emergency/risk phrases (en/es/pt), fixed weights 8-10, short-circuit
- Moderate, behavioral and communication distress phrases
- Anxiety dimensions (physical/cognitive/emotional/behavioral/sleep)
  at severity tiers
- Duration and intensity multipliers
- Major life-stressor bonuses
- Trigger definitions with categories, and compound co-occurrence rules

CLINICAL_REVIEW_REQUIRED: All phrases and weights are heuristics
and must be reviewed by mental health professionals. They are not
a diagnostic instrument.
"""

import re

from serene.services.detection.weighted_patterns import (
    CompoundRule,
    Modifier,
    TriggerDefinition,
    WeightedPattern,
    modifier,
    pattern,
)


# =============================================================================
# EMERGENCY / RISK
# SAFETY_CRITICAL: Any match is returned directly as the anxiety level.
# =============================================================================

EMERGENCY_PATTERNS: tuple[WeightedPattern, ...] = (
    pattern(r"(?:i\s+(?:want|need|going|plan|thinking|wish)\s+to\s+(?:kill|end|hurt|harm)\s+(?:myself|my\s+life))", 10, "Direct suicidal ideation"),
    pattern(r"(?:suicide|suicidal|end\s+it\s+all|take\s+my\s+(?:own\s+)?life|better\s+off\s+dead)", 10, "Suicidal terminology"),
    pattern(r"(?:no\s+(?:point|reason)\s+(?:in\s+)?(?:living|going\s+on)|tired\s+of\s+living|done\s+with\s+(?:life|everything))", 9, "Life meaninglessness"),
    pattern(r"(?:can'?t\s+(?:go\s+on|take\s+(?:it|this)\s+anymore)|at\s+(?:my|the)\s+breaking\s+point)", 8, "Crisis state"),
    # Spanish
    pattern(r"(?:quiero|voy\s+a|pienso|necesito)\s+(?:suicidarme|matarme|quitarme\s+la\s+vida|acabar\s+conmigo)", 10, "Spanish suicidal ideation"),
    pattern(r"(?:no\s+quiero\s+vivir|mejor\s+estar(?:ía)?\s+muerto|ya\s+no\s+(?:puedo|aguanto)\s+más)", 9, "Spanish hopelessness"),
    # Portuguese
    pattern(r"(?:quero|vou|preciso)\s+(?:me\s+matar|suicidar|acabar\s+com\s+(?:minha\s+)?vida)", 10, "Portuguese suicidal ideation"),
    pattern(r"(?:não\s+quero\s+viver|melhor\s+estar\s+morto|não\s+aguento\s+mais)", 9, "Portuguese hopelessness"),
)


# =============================================================================
# GENERAL DISTRESS PHRASES
# =============================================================================

MODERATE_DISTRESS_PATTERNS: tuple[WeightedPattern, ...] = (
    pattern(r"(?:feel\s+(?:bad|terrible|awful|horrible|miserable))", 1.5, "General negative feelings"),
    pattern(r"(?:don'?t\s+feel\s+(?:good|understood|heard|valued))", 1.3, "Feeling invalidated"),
    pattern(r"(?:frustrated|upset|bothered|troubled)", 1.2, "Moderate distress"),
    pattern(r"(?:stressed|worried|concerned)", 1.0, "Mild anxiety indicators"),
)

BEHAVIORAL_DISTRESS_PATTERNS: tuple[WeightedPattern, ...] = (
    pattern(r"(?:please\s+listen|don'?t\s+stop|hear\s+me\s+out)", 1.8, "Urgent communication need"),
    pattern(r"(?:said\s+that\s+i.*said\s+that\s+i)", 1.5, "Repetitive messaging pattern"),
    pattern(r"(?:nobody\s+(?:listens|understands)|feel\s+ignored)", 1.6, "Social disconnection"),
)

COMMUNICATION_DISTRESS_PATTERNS: tuple[WeightedPattern, ...] = (
    pattern(r"(?:listen\s+to\s+me|pay\s+attention|understand\s+me)", 1.4, "Need for validation"),
    pattern(r"(?:feel\s+like\s+nobody|no\s+one\s+(?:cares|listens|understands))", 1.7, "Isolation feelings"),
)


# =============================================================================
# ANXIETY DIMENSIONS
# Labels are "<dimension>/<severity>".
# =============================================================================

DIMENSION_PATTERNS: tuple[WeightedPattern, ...] = (
    # Physical
    pattern(r"(?:panic\s+attack|can'?t\s+breathe|hyperventilat|chest\s+(?:pain|tight|pressure))", 3.0, "physical/severe"),
    pattern(r"(?:heart\s+(?:racing|pounding|beating\s+fast)|palpitations)", 2.5, "physical/severe"),
    pattern(r"(?:trembling|shaking|tremors|dizzy|faint|nauseous)", 2.0, "physical/severe"),
    pattern(r"(?:headache|muscle\s+tension|restless|jittery|sweating)", 1.5, "physical/moderate"),
    pattern(r"(?:stomach\s+(?:ache|knots|butterflies)|tight\s+throat)", 1.0, "physical/moderate"),
    # Cognitive
    pattern(r"(?:can'?t\s+(?:focus|concentrate|think\s+straight)|mind\s+(?:racing|blank|fog))", 2.5, "cognitive/severe"),
    pattern(r"(?:catastroph|worst\s+case|terrible\s+things|spiraling|obsess)", 2.0, "cognitive/severe"),
    pattern(r"(?:going\s+crazy|losing\s+my\s+mind|unreal|detached|paranoi)", 3.0, "cognitive/severe"),
    pattern(r"(?:worried|overthinking|ruminating|distract|forgetful)", 1.0, "cognitive/moderate"),
    pattern(r"(?:indecisive|uncertain|confused|doubt)", 0.8, "cognitive/moderate"),
    # Emotional
    pattern(r"(?:terrified|petrified|horrified|desperate|overwhelm)", 2.5, "emotional/severe"),
    pattern(r"(?:hopeless|helpless|trapped|doomed|unbearable)", 2.8, "emotional/severe"),
    pattern(r"(?:breaking\s+down|falling\s+apart|losing\s+control|can'?t\s+(?:handle|cope|bear))", 3.0, "emotional/severe"),
    pattern(r"(?:anxious|nervous|scared|afraid|frightened|uneasy|on\s+edge)", 1.2, "emotional/moderate"),
    pattern(r"(?:stressed|worry|concern|distress|uncomfortable|irritable)", 1.0, "emotional/moderate"),
    pattern(r"(?:apprehensive|bothered|unsettled|troubled|annoyed)", 0.5, "emotional/mild"),
    # Behavioral
    pattern(r"(?:avoid|can'?t\s+(?:go|do|face|handle)|cancel|escape|hiding)", 2.0, "behavioral/severe"),
    pattern(r"(?:isolation|shut\s+down|frozen|paralyzed|compulsion)", 2.5, "behavioral/severe"),
    pattern(r"(?:procrastinat|putting\s+off|reluctant|pacing|fidget)", 1.0, "behavioral/moderate"),
    pattern(r"(?:nail\s+biting|hair\s+pulling|reassurance\s+seeking)", 1.2, "behavioral/moderate"),
    # Sleep
    pattern(r"(?:can'?t\s+sleep|insomnia|awake\s+all\s+night|nightmares)", 2.0, "sleep/severe"),
    pattern(r"(?:completely\s+exhausted|total\s+fatigue|drained)", 1.8, "sleep/severe"),
    pattern(r"(?:trouble\s+sleeping|restless\s+sleep|tired|low\s+energy)", 1.0, "sleep/moderate"),
)


# =============================================================================
# MODIFIERS
# =============================================================================

DURATION_MODIFIERS: tuple[Modifier, ...] = (
    modifier(r"(?:constant|all\s+the\s+time|every\s+day|never\s+stops|chronic|for\s+(?:weeks|months|years))", 1.5),
    modifier(r"(?:often|frequently|regular|most\s+days|several\s+times)", 1.2),
    modifier(r"(?:sometimes|occasionally|comes\s+and\s+goes|on\s+and\s+off)", 0.8),
    modifier(r"(?:first\s+time|just\s+started|recent|\bnew\b|temporary)", 0.9),
)

INTENSITY_MODIFIERS: tuple[Modifier, ...] = (
    modifier(r"(?:extreme|intense|severe|overwhelming|unbearable|excruciating)", 1.4),
    modifier(r"\b(?:really|very|so|extremely|incredibly|absolutely)\b", 1.2),
    modifier(r"(?:\bmild|slight|bit\s+of|\blittle\b|somewhat|sort\s+of|kind\s+of)", 0.7),
)


# =============================================================================
# MAJOR LIFE STRESSORS
# Weight is the additive bonus applied after multipliers.
# =============================================================================

LIFE_STRESSOR_PATTERNS: tuple[WeightedPattern, ...] = (
    pattern(r"(?:job\s+loss|fired|laid\s+off|unemployed|lost\s+my\s+job)", 6, "Job loss"),
    pattern(r"(?:could\s+(?:fire|get\s+fired)|might\s+(?:lose|fire)|fear\s+(?:of\s+)?(?:losing|firing))", 5, "Job loss threat"),
    pattern(r"(?:financial\s+(?:crisis|trouble|emergency)|can'?t\s+pay\s+bills|bankruptcy|debt)", 5, "Financial crisis"),
    pattern(r"(?:don'?t\s+have\s+money|no\s+money|can'?t\s+afford|\bbroke\b)", 4, "Financial strain"),
    pattern(r"(?:crashed\s+(?:my\s+)?car|car\s+accident|accident\s+today)", 5, "Car accident"),
    pattern(r"(?:don'?t\s+have\s+(?:anybody|anyone)|no\s+one\s+(?:to\s+)?(?:rely\s+on|help))", 4, "No support system"),
    pattern(r"(?:divorce|breakup|relationship\s+(?:ending|over)|separation)", 4, "Relationship ending"),
    pattern(r"(?:\bdeath\b|\bdied\b|funeral|grief|mourning|passed\s+away)", 5, "Bereavement"),
    pattern(r"(?:illness|disease|diagnosis|hospital|medical\s+emergency)", 4, "Health crisis"),
    pattern(r"(?:eviction|foreclosure|homeless|losing\s+(?:my\s+)?(?:home|house))", 6, "Housing crisis"),
)


# =============================================================================
# CONTEXT SIGNALS
# =============================================================================

# Markers counted when comparing intensity against the previous user message
INTENSITY_MARKER = re.compile(r"!|\b(?:very|so|really|extremely)\b", re.IGNORECASE)

# Visible negative affect that should never be reported as "no signal"
GENERAL_DISTRESS = re.compile(
    r"\b(?:sad|upset|down|bad|terrible|awful|horrible|miserable)\b", re.IGNORECASE
)

FEELING_VERB = re.compile(r"\b(?:feel|feeling|felt)\b", re.IGNORECASE)
NEGATIVE_FEELING = re.compile(r"\b(?:bad|sad|upset|frustrated|terrible|awful)\b", re.IGNORECASE)

# Topics whose recurrence across turns signals a persistent concern
PERSISTENT_TOPICS: tuple[str, ...] = (
    "job", "work", "boss", "money", "rent", "car",
    "family", "school", "exam", "health", "relationship",
)


# =============================================================================
# TRIGGER DEFINITIONS
# =============================================================================

def _trigger(
    key: str,
    category: str,
    description: str,
    *weighted: tuple[str, float],
) -> TriggerDefinition:
    return TriggerDefinition(
        key=key,
        patterns=tuple(
            pattern(regex, weight, f"{key}#{index}")
            for index, (regex, weight) in enumerate(weighted, start=1)
        ),
        category=category,
        description=description,
    )


TRIGGER_DEFINITIONS: tuple[TriggerDefinition, ...] = (
    # Work
    _trigger(
        "work_dissatisfaction", "work",
        "Job dissatisfaction and workplace unhappiness",
        (r"(?:don'?t\s+like\s+(?:my\s+)?(?:current\s+)?job|hate\s+(?:my\s+)?(?:current\s+)?job)", 2.2),
        (r"(?:job\s+(?:sucks|is\s+terrible|is\s+awful|makes\s+me\s+miserable))", 2.0),
        (r"(?:want\s+to\s+(?:quit|leave)\s+(?:my\s+)?job|thinking\s+about\s+quitting)", 2.1),
        (r"(?:feel\s+(?:bad|terrible|awful|horrible|miserable)\s+(?:about\s+)?(?:my\s+)?(?:current\s+)?job)", 2.0),
    ),
    _trigger(
        "work_communication", "work",
        "Workplace communication and feeling heard",
        (r"(?:not\s+(?:heard|understood|listened\s+to)\s+at\s+work)", 1.9),
        (r"(?:don'?t\s+feel\s+understood\s+(?:at\s+work)?)", 1.8),
        (r"(?:nobody\s+listens\s+(?:at\s+work|to\s+me))", 1.7),
        (r"(?:feel\s+ignored\s+(?:at\s+work)?)", 1.6),
        (r"(?:boss\s+(?:doesn'?t\s+listen|ignores\s+me)|nobody\s+listens\s+at\s+work)", 1.8),
    ),
    _trigger(
        "work_performance", "work",
        "Work performance anxiety and professional self-doubt",
        (r"(?:not\s+good\s+enough\s+at\s+work|bad\s+at\s+(?:my\s+)?job)", 2.0),
        (r"(?:incompetent|inadequate\s+at\s+work|terrible\s+employee)", 1.9),
        (r"(?:imposter\s+syndrome|don'?t\s+belong\s+(?:at\s+work|here))", 1.8),
        (r"(?:everyone\s+else\s+is\s+better|others\s+are\s+more|i'm\s+the\s+worst)", 1.9),
    ),
    _trigger(
        "work_environment", "work",
        "External work circumstances and job security",
        (r"(?:toxic\s+workplace|bad\s+boss|office\s+politics|workplace\s+bullying)", 1.5),
        (r"(?:fired|laid\s+off|terminated|let\s+go|downsizing)", 1.8),
        (r"(?:job\s+security|unstable\s+work|contract\s+ending)", 1.4),
        (r"(?:could\s+(?:fire|get\s+fired)|might\s+(?:lose|fire)|fear\s+(?:of\s+)?(?:losing|firing))", 2.2),
        (r"(?:risk\s+(?:of\s+)?(?:being\s+)?fired|job\s+(?:at\s+)?risk)", 2.0),
    ),
    # Identity
    _trigger(
        "self_worth", "identity",
        "Core self-esteem and identity issues",
        (r"(?:feel\s+(?:less\s+than|inferior|worthless|useless|inadequate)|not\s+good\s+enough)", 2.5),
        (r"(?:everyone\s+(?:else\s+)?is\s+(?:better|smarter|more\s+successful)|i'm\s+(?:the\s+)?worst)", 2.3),
        (r"(?:don'?t\s+(?:deserve|belong|measure\s+up)|waste\s+of\s+space|failure)", 2.4),
        (r"(?:compare\s+myself|others\s+have\s+it\s+figured\s+out|behind\s+in\s+life)", 2.0),
        (r"(?:hate\s+myself|i'm\s+(?:a\s+)?failure|feel\s+like\s+(?:a\s+)?loser)", 2.4),
    ),
    # Life path
    _trigger(
        "educational_regret", "life_path",
        "Regret about educational choices and career path alignment",
        (r"(?:(?:master'?s?|degree|mba|phd|education|diploma)\s+(?:is\s+)?(?:useless|worthless|waste|pointless))", 2.2),
        (r"(?:wrong\s+(?:degree|major|field|career\s+path)|should\s+have\s+studied)", 2.0),
        (r"(?:wasted\s+(?:time|years|money)\s+(?:on\s+)?(?:school|college|university|degree))", 2.1),
        (r"(?:overqualified|too\s+educated|degree\s+(?:doesn'?t|won'?t)\s+help)", 1.8),
    ),
    _trigger(
        "career_direction", "life_path",
        "Uncertainty about life direction and purpose",
        (r"(?:don'?t\s+know\s+what\s+(?:to\s+do|i\s+want)|career\s+(?:confusion|crisis|lost))", 1.8),
        (r"(?:wrong\s+(?:career|path|field)|not\s+meant\s+for\s+this)", 1.7),
        (r"(?:passion|purpose|calling|what\s+i'm\s+supposed\s+to\s+do)", 1.5),
    ),
    # Social
    _trigger(
        "social_disconnection", "social",
        "Social isolation and communication difficulties",
        (r"(?:nobody\s+(?:understands|listens\s+to)\s+me)", 1.8),
        (r"(?:feel\s+(?:alone|lonely|isolated|disconnected))", 1.7),
        (r"(?:no\s+one\s+(?:cares|gets\s+it|understands))", 1.9),
        (r"(?:nobody|no\s+one|don'?t\s+have\s+anybody)\s+(?:to\s+rely\s+on|that\s+i\s+can\s+rely\s+on)", 2.5),
        (r"(?:don'?t\s+have\s+(?:anybody|anyone)|have\s+no\s+one|nobody)\s+to\s+(?:help|turn\s+to|talk\s+to)", 2.2),
    ),
    _trigger(
        "validation_seeking", "social",
        "Need for validation and being heard",
        (r"(?:please\s+listen|need\s+(?:someone\s+to\s+)?(?:listen|understand))", 1.6),
        (r"(?:hear\s+me\s+out|pay\s+attention\s+to\s+me)", 1.5),
        (r"(?:validate\s+(?:my\s+)?feelings|need\s+validation)", 1.4),
        (r"(?:don'?t\s+stop|keep\s+listening)", 1.3),
    ),
    _trigger(
        "social_comparison", "social",
        "Social comparison and fear of being left behind",
        (r"(?:everyone\s+(?:else\s+)?(?:has|got|is)|peers\s+are|friends\s+are\s+more)", 1.6),
        (r"(?:behind\s+(?:in\s+life|everyone)|late\s+bloomer|not\s+where\s+i\s+should\s+be)", 1.8),
        (r"(?:social\s+media|instagram|facebook|linkedin)\s*(?:makes\s+me|shows\s+everyone)", 1.4),
    ),
    # Emotional
    _trigger(
        "emotional_distress", "emotional",
        "General emotional distress and negative feelings",
        (r"(?:feel\s+(?:bad|terrible|awful|horrible|miserable))", 1.5),
        (r"(?:emotionally\s+(?:drained|exhausted)|can'?t\s+handle)", 1.8),
        (r"(?:frustrated|upset|bothered|distressed)", 1.3),
        (r"(?:don'?t\s+feel\s+(?:good|understood|heard|valued))", 1.3),
        (r"(?:feel\s+(?:really|very|so|extremely)\s+(?:bad|terrible|awful|sad|anxious))", 2.0),
        (r"(?:also\s+(?:anxious|worried|scared)|and\s+(?:anxious|worried|scared))", 1.7),
    ),
    # Practical
    _trigger(
        "financial_security", "practical",
        "Financial security and money concerns",
        (r"(?:can'?t\s+afford\s+(?:bills|rent|food|groceries|mortgage))", 1.8),
        (r"(?:financial\s+(?:crisis|emergency|trouble|stress))", 1.7),
        (r"(?:\bbroke\b|bankruptcy|debt\s+problems|money\s+problems)", 1.6),
        (r"(?:lost\s+(?:my\s+)?house|eviction|foreclosure)", 2.0),
        (r"(?:don'?t\s+have\s+money|can'?t\s+pay|need\s+money\s+for)", 1.9),
    ),
    _trigger(
        "transportation_crisis", "practical",
        "Transportation and mobility concerns",
        (r"(?:car\s+accident|crashed\s+(?:my\s+)?car|accident\s+today)", 2.2),
        (r"(?:need\s+(?:to\s+)?(?:find|buy)\s+(?:a\s+)?new\s+car|have\s+to\s+(?:find|buy)\s+(?:a\s+)?(?:new\s+)?car)", 1.8),
        (r"(?:car\s+(?:broke|damaged|totaled)|without\s+(?:a\s+)?car)", 1.7),
    ),
    # Existential
    _trigger(
        "future_anxiety", "existential",
        "Uncertainty about future outcomes and planning",
        (r"(?:what\s+(?:if|will\s+happen)|future|uncertain|don'?t\s+know\s+what)", 1.2),
        (r"(?:career\s+(?:prospects|future|options)|job\s+market|employment\s+outlook)", 1.4),
        (r"(?:don'?t\s+know\s+where\s+(?:to\s+find|i\s+can\s+find)|don'?t\s+know\s+where)", 1.6),
    ),
    # Family
    _trigger(
        "family_expectations", "social",
        "Family expectations and pressure",
        (r"(?:family\s+(?:expects|disappointed|pressure)|parents\s+(?:think|expect|invested))", 1.6),
        (r"(?:let\s+(?:everyone|family|parents)\s+down|disappointed\s+(?:family|parents))", 1.7),
    ),
)


# =============================================================================
# COMPOUND RULES
# Evaluated in this order against qualifying trigger keys.
# =============================================================================

COMPOUND_RULES: tuple[CompoundRule, ...] = (
    CompoundRule(
        name="job_communication_frustration",
        description="Job dissatisfaction combined with communication issues",
        requires_all=frozenset({"work_dissatisfaction", "work_communication"}),
        involved=frozenset({"work_dissatisfaction", "work_communication"}),
    ),
    CompoundRule(
        name="distress_validation_seeking",
        description="Emotional distress with need for validation",
        requires_all=frozenset({"emotional_distress", "validation_seeking"}),
        involved=frozenset({"emotional_distress", "validation_seeking"}),
    ),
    CompoundRule(
        name="job_loss_financial_anxiety",
        description="Job loss creating financial security concerns",
        requires_all=frozenset({"work_environment", "financial_security"}),
        involved=frozenset({"work_environment", "financial_security"}),
    ),
    CompoundRule(
        name="accident_financial_job_crisis",
        description="Car accident creating cascading financial and job concerns",
        requires_all=frozenset({"transportation_crisis"}),
        requires_any=frozenset({"financial_security", "work_environment"}),
        involved=frozenset({"transportation_crisis", "financial_security", "work_environment"}),
    ),
    CompoundRule(
        name="isolated_multi_stressor",
        description="Multiple stressors combined with social isolation",
        requires_all=frozenset({"social_disconnection"}),
    ),
)

# Triggers whose presence raises the reconciled anxiety level
HIGH_ANXIETY_TRIGGERS: frozenset[str] = frozenset({
    "self_worth",
    "educational_regret",
    "career_direction",
    "work_environment",
    "transportation_crisis",
    "social_disconnection",
})
