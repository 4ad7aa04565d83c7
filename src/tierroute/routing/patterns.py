"""Pattern tables for complexity scoring.

Each weighted group is data, not code: a category, a list of
matchers and a weight, all consumed by `score_pattern_group`.
The unweighted lists (simple, technical domain, multi-step, tool
use, expert complexity) are plain presence checks.

Matchers are case-insensitive unless noted. A few code matchers are
deliberately case-sensitive: ``Class`` in prose is not ``class``.
Word boundaries and classes are ASCII-only, so accented words never
count as a single word.
"""

import re
from dataclasses import dataclass

from tierroute.types import ReasonCategory


def _compile(pattern: str, flags: int = 0) -> re.Pattern[str]:
    """Compile with ASCII-only \\w, \\b and \\d."""
    return re.compile(pattern, flags | re.ASCII)


@dataclass(frozen=True)
class PatternGroup:
    """A named, weighted set of matchers."""
    name: str
    category: ReasonCategory
    patterns: tuple[re.Pattern[str], ...]
    weight: float

    def match_count(self, prompt: str) -> int:
        return sum(1 for p in self.patterns if p.search(prompt))

    def matches(self, prompt: str) -> bool:
        return any(p.search(prompt) for p in self.patterns)


def score_pattern_group(prompt: str, group: PatternGroup) -> float:
    """Score a prompt against one group with diminishing returns.

    The first match is worth half the weight; every further match
    adds a little more until all patterns match and the score
    saturates at the full weight.
    """
    match_count = group.match_count(prompt)
    if match_count == 0:
        return 0.0
    normalized = min(match_count / len(group.patterns), 1.0)
    return group.weight * (0.5 + normalized * 0.5)


def matches_any(prompt: str, patterns: tuple[re.Pattern[str], ...]) -> bool:
    return any(p.search(prompt) for p in patterns)


def count_matches(prompt: str, patterns: tuple[re.Pattern[str], ...]) -> int:
    return sum(1 for p in patterns if p.search(prompt))


CODE = PatternGroup(
    name="code",
    category=ReasonCategory.CODE,
    patterns=(
        _compile(r"```[\s\S]*?```"),
        _compile(r"`[^`]+`"),
        _compile(
            r"\b(function|class|const|let|var|def|import|export|return|if|else|for|while)\b"),
        _compile(r"\b(async|await|promise|callback|try|catch|throw)\b", re.I),
        _compile(r"[{}\[\]();].*[{}\[\]();]"),
        _compile(
            r"\b(error|exception|bug|debug|fix|issue|crash|undefined|null)\b", re.I),
        _compile(
            r"\b(npm|pip|yarn|git|docker|kubernetes|api|sdk|rest|graphql)\b", re.I),
        _compile(r"\.(js|ts|py|java|cpp|go|rs|rb|php|swift|kt)\b", re.I),
        _compile(r"\b(console\.log|print|printf|console\.error)\b"),
        _compile(r"=>|->|\|\||&&|===|!=="),
        _compile(
            r"\b(implement|code|program|script|algorithm|refactor)\b", re.I),
        _compile(
            r"\b(python|javascript|typescript|java|c\+\+|golang|rust|ruby)\b", re.I),
        _compile(
            r"\b(write|create|build|develop)\b.*"
            r"\b(code|function|class|app|application|program|component)\b", re.I),
        _compile(r"\b(react|vue|angular|svelte|nextjs|node|express)\b", re.I),
        _compile(
            r"\b(useState|useEffect|useRef|useCallback|useMemo|useContext)\b"),
        _compile(r"\b(component|props|state|render|jsx|tsx)\b", re.I),
    ),
    weight=0.35,
)

REASONING = PatternGroup(
    name="reasoning",
    category=ReasonCategory.REASONING,
    patterns=(
        _compile(
            r"\b(explain|analyze|compare|evaluate|assess|examine|investigate)\b", re.I),
        _compile(r"\b(why|how does|what if|suppose|consider|imagine)\b", re.I),
        _compile(
            r"\b(pros and cons|trade-?offs?|advantages?|disadvantages?|benefits?|drawbacks?)\b", re.I),
        _compile(
            r"\b(step by step|break down|walk through|elaborate|detail)\b", re.I),
        _compile(
            r"\b(reasoning|logic|argument|evidence|justify|rationale)\b", re.I),
        _compile(r"\b(implications?|consequences?|impact|effect|result)\b", re.I),
        _compile(
            r"\b(difference between|similarities?|contrast|versus|vs\.?)\b", re.I),
        _compile(r"\b(complex|complicated|intricate|sophisticated)\b", re.I),
        _compile(r"\b(architecture|design|system|framework)\b", re.I),
        _compile(
            r"\b(fix|solve|resolve|diagnose|troubleshoot|debug)\b", re.I),
        _compile(
            r"\b(race condition|deadlock|memory leak|bottleneck)\b", re.I),
    ),
    weight=0.25,
)

# Comprehensive research, RAG and deep synthesis cues
EXPERT = PatternGroup(
    name="expert",
    category=ReasonCategory.REASONING,
    patterns=(
        _compile(
            r"\b(comprehensive|thorough|in-?depth|exhaustive|detailed)\b.*"
            r"\b(research|analysis|review|study|report)\b", re.I),
        _compile(
            r"\b(research|investigate|explore)\b.*\b(comprehensive|thorough|all|every)\b", re.I),
        _compile(r"\bcomprehensive\b", re.I),
        _compile(r"\bthorough(ly)?\b", re.I),
        _compile(r"\bin-?depth\b", re.I),
        _compile(r"\bexhaustive\b", re.I),
        _compile(
            r"\b(rag|retrieval|knowledge base|document)\b.*\b(search|query|analysis)\b", re.I),
        _compile(
            r"\b(multi-?step|complex)\b.*\b(reasoning|analysis|research)\b", re.I),
        _compile(r"\b(critical|deep)\b.*\b(analysis|thinking|review)\b", re.I),
        _compile(
            r"\b(synthesize|integrate|consolidate)\b.*\b(information|sources|data)\b", re.I),
    ),
    weight=0.45,
)

MATH = PatternGroup(
    name="math",
    category=ReasonCategory.MATH,
    patterns=(
        _compile(
            r"\b(calculate|compute|solve|equation|formula|expression)\b", re.I),
        _compile(r"[+\-*/^=<>≤≥∑∏∫∂∇]"),
        _compile(
            r"\b(derivative|integral|probability|statistics|algorithm)\b", re.I),
        _compile(r"\$[^$]+\$"),
        _compile(r"\$\$[\s\S]+?\$\$"),
        _compile(r"\b(matrix|vector|scalar|tensor|eigenvalue)\b", re.I),
        _compile(r"\b(proof|theorem|lemma|corollary)\b", re.I),
        _compile(r"\b(\d+\.?\d*)\s*[×x*]\s*(\d+\.?\d*)"),
        _compile(
            r"\b(percent|percentage|ratio|proportion|fraction)\b", re.I),
    ),
    weight=0.15,
)

CREATIVE = PatternGroup(
    name="creative",
    category=ReasonCategory.CREATIVE,
    patterns=(
        _compile(
            r"\b(write|create|generate|compose|draft|craft|build|make|design)\b", re.I),
        _compile(
            r"\b(story|poem|essay|article|blog|script|novel|narrative)\b", re.I),
        _compile(
            r"\b(creative|imaginative|original|unique|innovative)\b", re.I),
        _compile(r"\b(tone|style|voice|mood|atmosphere)\b", re.I),
        _compile(r"\b(character|plot|setting|dialogue|scene)\b", re.I),
        _compile(r"\b(metaphor|simile|imagery|symbolism)\b", re.I),
    ),
    weight=0.15,
)

# Dashboards, components, charts: a mid-tier model handles these well
UI_GENERATION = PatternGroup(
    name="ui_generation",
    category=ReasonCategory.UI_GENERATION,
    patterns=(
        _compile(
            r"\b(dashboard|ui|interface|component|widget|page|app|application)\b", re.I),
        _compile(
            r"\b(react|vue|angular|svelte|html|css|frontend|front-?end)\b", re.I),
        _compile(
            r"\b(chart|graph|visualization|table|grid|layout|form)\b", re.I),
        _compile(
            r"\b(button|input|modal|dropdown|menu|navbar|sidebar|card)\b", re.I),
        _compile(r"\b(artifact|interactive|render|display|show)\b", re.I),
    ),
    weight=0.20,
)

SIMPLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    _compile(
        r"^(hi|hello|hey|thanks|thank you|ok|okay|yes|no|sure|got it|bye|goodbye)\s*[.!?]?\s*$", re.I),
    _compile(r"^(what is|define|meaning of|what's)\s+\w+\s*\??$", re.I),
    _compile(r"^(how are you|what's up|how's it going)\s*\??$", re.I),
    _compile(r"^(tell me a joke|say something funny)\s*$", re.I),
    _compile(r"^(good morning|good evening|good night)\s*[.!]?\s*$", re.I),
)

TECHNICAL_DOMAIN_PATTERNS: tuple[re.Pattern[str], ...] = (
    _compile(r"\b(API|SDK|REST|GraphQL|OAuth|JWT|WebSocket|HTTP)\b", re.I),
    _compile(
        r"\b(Kubernetes|Docker|AWS|Azure|GCP|Terraform|Ansible)\b", re.I),
    _compile(
        r"\b(neural|transformer|embedding|vector|tensor|gradient)\b", re.I),
    _compile(
        r"\b(quantum|molecular|genomic|clinical|pharmaceutical)\b", re.I),
    _compile(
        r"\b(microservices?|serverless|cloud-?native|devops|cicd)\b", re.I),
    _compile(
        r"\b(blockchain|cryptocurrency|smart contract|defi|nft)\b", re.I),
    _compile(
        r"\b(machine learning|deep learning|nlp|computer vision|llm)\b", re.I),
)

MULTI_STEP_PATTERNS: tuple[re.Pattern[str], ...] = (
    _compile(r"\b(first|then|next|after that|finally|step \d+)\b", re.I),
    _compile(r"\b(also|additionally|furthermore|moreover)\b", re.I),
    _compile(r"\d+\.\s+.*\n\d+\.\s+"),  # numbered list
    _compile(r"[-*]\s+.*\n[-*]\s+"),  # bullet list
    _compile(r"\band\b.*\band\b.*\band\b", re.I),
)

# Phrases implying the caller will dispatch to web search, code
# execution, file search or artifact tools.
TOOL_USE_PATTERNS: tuple[re.Pattern[str], ...] = (
    _compile(
        r"\b(search|lookup|find|google|browse)\b.*\b(web|internet|online|news|latest)\b", re.I),
    _compile(
        r"\b(latest|recent|current|today|news)\b.*\b(about|on|regarding)\b", re.I),
    _compile(r"\bwhat('s| is) happening\b", re.I),
    _compile(
        r"\b(run|execute|eval|compute|calculate)\b.*\b(code|script|python|javascript)\b", re.I),
    _compile(r"\b(write|create).*\b(and|then)\b.*\b(run|execute|test)\b", re.I),
    _compile(
        r"\b(search|find|look)\b.*\b(in |through |my )?(files?|documents?|uploads?)\b", re.I),
    _compile(
        r"\b(analyze|read|process)\b.*\b(file|document|pdf|image|upload)\b", re.I),
    _compile(
        r"\b(create|build|make|generate)\b.*"
        r"\b(dashboard|ui|interface|component|app|visualization)\b", re.I),
    _compile(r"\b(using|with)\s+artifacts?\b", re.I),
    _compile(r"\b(interactive|react|html)\b.*\b(component|page|app)\b", re.I),
)

# Structural markers of expert-level engineering work
EXPERT_COMPLEXITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    _compile(
        r"\b(architect|design system|scalab|distributed|microservices?)\b", re.I),
    _compile(
        r"\b(algorithm|complexity|big-?o|optimization|performance)\b", re.I),
    _compile(
        r"\b(security|authentication|authorization|encryption|vulnerability)\b", re.I),
    _compile(
        r"\b(machine learning|neural|training|model|inference)\b", re.I),
    _compile(
        r"\b(concurrent|parallel|async|threading|race condition)\b", re.I),
    _compile(
        r"\b(database design|schema|migration|query optimization)\b", re.I),
    _compile(
        r"\b(refactor|redesign|rewrite|overhaul)\b.*\b(entire|whole|complete|full)\b", re.I),
    _compile(
        r"\b(implement|build|create)\b.*\b(from scratch|complete|full)\b", re.I),
)

WEIGHTED_GROUPS: tuple[PatternGroup, ...] = (
    CODE, REASONING, EXPERT, MATH, CREATIVE, UI_GENERATION,
)
