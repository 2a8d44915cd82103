"""All magic numbers, enums, and string sets in one place."""

import re

# --- Agency vocabulary ---

AGENCY_STAGES = (
    "NEW",
    "WARM_UP",
    "HEAT",
    "OFFER",
    "CLOSE",
    "AFTERCARE",
    "RECOVERY",
    "BOUNDARY",
)
AGENCY_OBJECTIVES = (
    "CONNECT",
    "SELL_EXTRA",
    "SELL_PACK",
    "SELL_MONTHLY",
    "RECOVER",
    "RETAIN",
    "UPSELL",
)
AGENCY_INTENSITIES = ("SOFT", "MEDIUM", "INTENSE")
AGENCY_PLAYBOOKS = ("GIRLFRIEND", "PLAYFUL", "ELEGANT", "SOFT_DOMINANT")

DEFAULT_STAGE = "NEW"
DEFAULT_OBJECTIVE = "CONNECT"
DEFAULT_INTENSITY = "MEDIUM"
DEFAULT_PLAYBOOK = "GIRLFRIEND"

BLOCK_CATEGORIES = ("openers", "bridges", "teases", "ctas")
LEGACY_BLOCK_ALIASES = {"teases": "escalations", "ctas": "questions"}

DRAFT_MODES = ("full", "short")
DRAFT_LAYOUTS = ("lines", "inline")

# --- Composer ---

MAX_CONTEXT_WORDS = 10
MAX_CONTEXT_CHARS = 80
CONTEXT_REFERENCE_PREFIX = "Sobre lo de"
OFFER_PLACEHOLDERS = ("offerTitle", "offerTier", "offerPrice")

SAFE_UNDERAGE_REPLY = (
    "Antes de seguir: aquí solo +18. Si eres mayor de edad, confírmamelo y seguimos, ¿sí?"
)
SAFE_CONSENT_REPLY = (
    "Solo hago cosas consensuadas y cuidadas. Si te apetece algo sugerente y con calma, "
    "lo hacemos suave. ¿Te va?"
)

UNDERAGE_PATTERNS = [
    re.compile(r"\b(tengo|cumplo)\s*1[0-7]\b", re.IGNORECASE),
    re.compile(r"\b(tengo|cumplo)\s*1[0-7]\s*(años|anos)\b", re.IGNORECASE),
    re.compile(r"\b1[0-7]\s*(años|anos)\b", re.IGNORECASE),
    re.compile(r"\bsoy\s*menor\b", re.IGNORECASE),
    re.compile(r"\bmenor\s+de\s+edad\b", re.IGNORECASE),
    re.compile(r"\bsoy\s*1[0-7]\b", re.IGNORECASE),
]
COERCION_PATTERNS = [
    re.compile(r"\bsin\s+consentimiento\b", re.IGNORECASE),
    re.compile(r"\bno\s+me\s+digas\s+que\s+no\b", re.IGNORECASE),
    re.compile(r"\bforzar\b", re.IGNORECASE),
    re.compile(r"\bobligar\b", re.IGNORECASE),
    re.compile(r"\bsin\s+permiso\b", re.IGNORECASE),
    re.compile(r"\bno\s+quiero\s+pero\b", re.IGNORECASE),
]

# (pattern, replacement when singular, replacement when plural)
BANNED_TERM_REPLACEMENTS = [
    (re.compile(r"\bofertas?\b", re.IGNORECASE), "idea", "ideas"),
    (re.compile(r"\bmensual(es)?\b", re.IGNORECASE), "constante", "constantes"),
    (re.compile(r"\bpromo\b", re.IGNORECASE), "detalle", "detalle"),
    (re.compile(r"\bpremium\b", re.IGNORECASE), "cuidado", "cuidado"),
    (re.compile(r"\bespecial(es)?\b", re.IGNORECASE), "a tu medida", "a tu medida"),
]

# --- Draft QA ---

SHORT_DRAFT_CHARS = 180

BANNED_WORD_PATTERNS = [
    ("premium", re.compile(r"\bpremium\b", re.IGNORECASE)),
    ("promo", re.compile(r"\bpromo\b", re.IGNORECASE)),
    ("oferta", re.compile(r"\bofertas?\b", re.IGNORECASE)),
    ("especial", re.compile(r"\bespecial(es)?\b", re.IGNORECASE)),
    ("mensual", re.compile(r"\bmensual(es)?\b", re.IGNORECASE)),
]
MARKETING_WORDS = [
    "promoción", "promo", "oferta", "premium", "especial", "mensual",
    "aprovecha", "compra ya", "pack", "suscripción", "link",
]
GENERIC_PATTERNS = [
    re.compile(r"\bhola\b", re.IGNORECASE),
    re.compile(r"\bqué\s+tal\b", re.IGNORECASE),
    re.compile(r"\bc[oó]mo\s+est[aá]s\b", re.IGNORECASE),
    re.compile(r"\ben\s+qu[eé]\s+puedo\s+ayudar\b", re.IGNORECASE),
    re.compile(r"\bestoy\s+aquí\s+para\s+ayudar\b", re.IGNORECASE),
]
HUMAN_DETAIL_PATTERNS = [
    re.compile(r"\bhoy\b", re.IGNORECASE),
    re.compile(r"\bahora\b", re.IGNORECASE),
    re.compile(r"\baqu[ií]\b", re.IGNORECASE),
    re.compile(r"\bme\s+gusta\b", re.IGNORECASE),
    re.compile(r"\bme\s+apetece\b", re.IGNORECASE),
    re.compile(r"\bcontigo\b", re.IGNORECASE),
    re.compile(r"\bte\s+leo\b", re.IGNORECASE),
    re.compile(r"\bme\s+encanta\b", re.IGNORECASE),
]

WARNING_EMPTY = "Sin contenido"
WARNING_NO_QUESTION = "Sin pregunta final"
WARNING_TOO_LONG = "Demasiado largo"
WARNING_TOO_SHORT = "Demasiado corto"
WARNING_BANNED_PREFIX = "Palabras prohibidas"
WARNING_NO_WARMTH = "Poca calidez humana"
WARNING_MARKETING = "Suena a anuncio"
WARNING_GENERIC = "Demasiado genérico"

# --- Similarity ---

NEAR_DUPLICATE_THRESHOLD = 0.88
HEAD_MATCH_TOKENS = 12
HEAD_MATCH_MIN_SHARED = 8
LONG_OVERLAP_CHARS = 20
LONG_OVERLAP_STRIDE = 4

# --- Priority ---

STAGE_SCORES = {
    "NEW": 10,
    "WARM_UP": 15,
    "HEAT": 25,
    "OFFER": 30,
    "CLOSE": 35,
    "AFTERCARE": 8,
    "RECOVERY": 20,
    "BOUNDARY": 5,
}
OBJECTIVE_SCORES = {
    "CONNECT": 4,
    "SELL_EXTRA": 8,
    "SELL_PACK": 9,
    "SELL_MONTHLY": 10,
    "RECOVER": 8,
    "RETAIN": 6,
    "UPSELL": 9,
}
INTENSITY_SCORES = {
    "SOFT": 2,
    "MEDIUM": 4,
    "INTENSE": 6,
}

# (max hours since last inbound, points)
INCOMING_RECENCY_TIERS = [(2, 15), (12, 10), (48, 6), (168, 3)]
# (max hours since last outbound, penalty), only when we replied after the fan
AWAITING_REPLY_PENALTY_TIERS = [(6, -6), (24, -3)]

# (min amount, points), highest first
SPEND_7D_TIERS = [(150, 10), (75, 8), (30, 6), (10, 3), (1, 1)]
SPEND_30D_TIERS = [(300, 10), (150, 8), (60, 6), (20, 3), (1, 1)]

FLAG_SCORES = {
    "vip": 8,
    "expired": 9,
    "at_risk": 7,
    "is_new": 4,
}

# --- Inbox ---

VIP_SPEND_30D = 200
NEW_FAN_WINDOW_DAYS = 30
SEGMENT_VIP = "VIP"
SEGMENT_AT_RISK = "EN_RIESGO"
RISK_LOW = "LOW"
