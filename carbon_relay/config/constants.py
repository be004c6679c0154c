"""Default values and lookup tables for relay configuration.

Keyword tables map a canonical signal code to the keywords that imply it.
Single-word keywords match normalized tokens; keywords containing a space
match as whole phrases. Everything here is data: extending coverage means
editing a table (or overriding it in relay.yaml), never scoring code.
"""

from typing import Final


# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"
COMPONENT_MATCHER = "matcher"
COMPONENT_COLLECTORS = "collectors"

# Policy defaults
DEFAULT_MIN_SCORE: Final[float] = 0.32
DEFAULT_TOP_K: Final[int] = 3

# Recall defaults for the external search stage
DEFAULT_QUERIES_PER_HEADLINE: Final[int] = 3
DEFAULT_RESULTS_PER_QUERY: Final[int] = 10
DEFAULT_SEARCH_PER_HEADLINE: Final[int] = 25

# Default aggregate weights. Quality values are already additive boosts
# (0.08-0.18 per rule), so they enter the sum unscaled.
DEFAULT_WEIGHTS: Final[dict[str, float]] = {
    "overlap": 0.56,
    "title_sim": 0.28,
    "recency": 0.04,
    "market": 0.06,
    "topic": 0.04,
    "geo": 0.02,
    "quality": 1.0,
}

# Market code -> keywords (emissions trading schemes and unit types)
MARKET_KEYWORDS: Final[dict[str, list[str]]] = {
    "eua": ["eua", "eu ets", "eu emissions trading"],
    "uka": ["uka", "uk ets", "uk emissions trading"],
    "rggi": ["rggi", "regional greenhouse gas initiative"],
    "cca": ["cca", "california carbon allowance", "california cap-and-trade"],
    "accu": ["accu", "australian carbon credit unit", "safeguard mechanism"],
    "nzu": ["nzu", "new zealand ets", "nz ets"],
    "kau": ["kau", "k-ets", "korea ets", "korean emissions trading"],
    "cea": ["china ets", "chinese national ets", "national carbon market"],
    "irec": ["irec"],
    "ccer": ["ccer"],
    "corsia": ["corsia"],
}

# Topic code -> keywords (subject clusters)
TOPIC_KEYWORDS: Final[dict[str, list[str]]] = {
    "vcm": ["vcm", "voluntary carbon market"],
    "cdr": ["cdr", "carbon removal", "carbon dioxide removal"],
    "dac": ["dac", "direct air capture"],
    "beccs": ["beccs"],
    "biochar": ["biochar"],
    "methane": ["methane"],
    "forest_carbon": ["forest", "redd", "afforestation", "reforestation"],
    "hydrogen": ["hydrogen"],
    "litigation": ["litigation", "lawsuit", "court ruling"],
    "cbam": ["cbam", "carbon border adjustment mechanism"],
    "ets": ["emissions trading system", "emissions trading scheme", "cap-and-trade"],
    "offset": ["offset"],
    "credit": ["credit"],
}

# Geo code -> case-insensitive keywords
GEO_KEYWORDS: Final[dict[str, list[str]]] = {
    "europe": ["europe", "european"],
    "south_korea": ["south korea", "korea", "korean"],
    "new_zealand": ["new zealand"],
    "south_africa": ["south africa"],
    "taiwan": ["taiwan"],
    "malaysia": ["malaysia"],
    "india": ["india"],
    "china": ["china", "chinese"],
    "japan": ["japan", "japanese"],
    "australia": ["australia", "australian"],
    "alberta": ["alberta"],
    "canada": ["canada", "canadian"],
    "guyana": ["guyana"],
    "brazil": ["brazil"],
    "indonesia": ["indonesia"],
    "vietnam": ["vietnam"],
    "singapore": ["singapore"],
    "france": ["france", "french"],
    "germany": ["germany", "german"],
}

# Geo code -> regex patterns. Upper-case acronyms are case-sensitive so
# that the pronoun "us" is not read as the United States.
GEO_PATTERNS: Final[dict[str, list[str]]] = {
    "united_states": [
        r"\bUS\b",
        r"\bUSA\b",
        r"(?i)\bU\.S\.",
        r"(?i)\bunited states\b",
    ],
    "united_kingdom": [
        r"\bUK\b",
        r"(?i)\bU\.K\.",
        r"(?i)\bunited kingdom\b",
        r"(?i)\bbritain\b",
    ],
    "eu": [
        r"\bEU\b",
        r"(?i)\beuropean union\b",
    ],
}

# Geo code -> host suffixes of government / regional institution domains
DOMAIN_GEOS: Final[dict[str, list[str]]] = {
    "united_states": [".gov", ".mil"],
    "united_kingdom": [".gov.uk"],
    "eu": ["europa.eu"],
    "japan": [".go.jp"],
    "australia": [".gov.au"],
    "new_zealand": [".govt.nz"],
    "canada": [".gc.ca", "canada.ca"],
    "south_korea": [".go.kr"],
    "china": [".gov.cn"],
    "india": [".gov.in", ".nic.in"],
    "singapore": [".gov.sg"],
    "taiwan": [".gov.tw"],
    "france": [".gouv.fr"],
    "germany": [".bund.de"],
}

# Geos too broad to require a match on their own
BROAD_GEOS: Final[frozenset[str]] = frozenset(
    {"eu", "europe", "united_states", "united_kingdom"}
)

# Ordered domain quality rules. Every matching rule adds its boost once;
# the total is clipped to 1.0.
QUALITY_RULES: Final[list[dict[str, object]]] = [
    {
        "name": "pdf_document",
        "path_suffixes": [".pdf"],
        "boost": 0.18,
    },
    {
        "name": "government",
        "host_suffixes": [
            ".gov",
            ".gov.uk",
            ".gouv.fr",
            ".go.jp",
            ".gov.au",
            ".govt.nz",
            ".gc.ca",
            ".go.kr",
            ".gov.cn",
            ".gov.sg",
        ],
        "boost": 0.18,
    },
    {
        "name": "eu_institution",
        "host_suffixes": ["europa.eu"],
        "boost": 0.16,
    },
    {
        "name": "standards_registry",
        "host_suffixes": [
            "verra.org",
            "goldstandard.org",
            "icvcm.org",
            "iso.org",
            "acrcarbon.org",
            "climateactionreserve.org",
            "puro.earth",
            "ghgprotocol.org",
            "sciencebasedtargets.org",
        ],
        "boost": 0.15,
    },
    {
        "name": "academic",
        "host_suffixes": [".ac.uk", ".edu", ".ac.jp", ".edu.au", ".ac.nz", "arxiv.org"],
        "boost": 0.12,
    },
    {
        "name": "ngo_international",
        "host_suffixes": [
            "carbonmarketwatch.org",
            "forest-trends.org",
            "ecosystemmarketplace.com",
            "unfccc.int",
            "iea.org",
            "worldbank.org",
            "icapcarbonaction.com",
            "ieta.org",
            "oecd.org",
            "un.org",
        ],
        "boost": 0.12,
    },
    {
        "name": "investor_relations",
        "host_substrings": ["investor"],
        "path_substrings": ["/investor", "/ir/"],
        "boost": 0.12,
    },
    {
        "name": "press_release_wire",
        "host_suffixes": ["prnewswire.com", "businesswire.com", "globenewswire.com"],
        "boost": 0.08,
    },
]

# Recency decay: exp(-days / RECENCY_DECAY_DAYS)
RECENCY_DECAY_DAYS: Final[float] = 14.0

# Candidates published further than this from the headline score 0 recency
RECENCY_WINDOW_DAYS: Final[int] = 60

# Weak lexical evidence gates
MIN_SHARED_TOKENS: Final[int] = 2
TITLE_SIM_BYPASS: Final[float] = 0.90
BROAD_GEO_MIN_OVERLAP: Final[float] = 0.50
BROAD_GEO_MIN_TITLE_SIM: Final[float] = 0.84

