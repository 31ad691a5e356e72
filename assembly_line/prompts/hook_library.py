"""
Library of proven hook templates.

Templates live in ``data/hook_database.tsv`` next to this module. The file is
loosely structured: a line ending in ``:`` (or a short all-caps line) starts a
category, and template lines carry placeholders such as ``(insert topic)``,
optionally followed by tab-separated example URLs.

The library ranks templates for a niche, summarises them for the hook
prompt, and fills their placeholders with a creator's own details.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from .loader import PromptLoadError

logger = logging.getLogger(__name__)

HOOK_DATABASE_FILE = Path(__file__).parent / "data" / "hook_database.tsv"

_CATEGORY_RE = re.compile(r"[A-Z\s]+")
MAX_CATEGORY_CHARS = 30
MIN_TEMPLATE_CHARS = 10
DEFAULT_CATEGORY = "GENERAL"

# Boost for templates built around the viewer's outcome, pain or identity
BONUS_PHRASES = ("dream result", "pain point", "target audience")

NO_PATTERNS_MESSAGE = "No specific patterns found for this niche."

# Global cache for the parsed database
_database_cache: dict[Path, list["HookTemplate"]] = {}


@dataclass(frozen=True)
class HookTemplate:
    template: str
    category: str
    example_url: str | None = None


@dataclass(frozen=True)
class EnhancedHookTemplate(HookTemplate):
    """A template adapted to one creator, with the mechanism it relies on."""

    neural_mechanism: str = "information_gap"
    spcl_element: str = "likeness"
    platform_fit: tuple[str, ...] = ()
    scroll_stop_seconds: float = 1.8
    viral_score: int = 7


@dataclass
class UAVMarkers:
    """What makes the creator's angle unique."""

    description: str = ""
    unique_intersection: str | None = None  # "Developer AND marketer"
    contrarian_view: str | None = None  # "Everyone says X, but I believe Y"
    proprietary_method: str | None = None  # "My C.A.L. system"


@dataclass
class SPCLMarkers:
    """Status, power, credibility and likeness signals, strongest first."""

    status: list[str] = field(default_factory=list)
    power: list[str] = field(default_factory=list)
    credibility: list[str] = field(default_factory=list)
    likeness: list[str] = field(default_factory=list)


@dataclass
class ProofPoints:
    results: str | None = None
    credentials: str | None = None
    track_record: str | None = None


@dataclass
class HookAdaptationContext:
    """Creator details used to fill template placeholders."""

    topic: str
    target_audience: str | None = None
    goal: str | None = None
    platforms: list[str] = field(default_factory=list)
    uav: UAVMarkers | None = None
    spcl: SPCLMarkers | None = None
    proof_points: ProofPoints | None = None


# =============================================================================
# Loading
# =============================================================================


def parse_hook_database(text: str) -> list[HookTemplate]:
    """Parse the TSV hook database into templates, keeping file order."""
    category = DEFAULT_CATEGORY
    templates: list[HookTemplate] = []

    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue

        parts = [part for part in trimmed.split("\t") if part.strip()]

        if len(parts) == 1 and "(insert" not in trimmed and "https://" not in trimmed:
            if ":" in trimmed:
                category = trimmed.replace(":", "", 1).strip()
            elif _CATEGORY_RE.fullmatch(trimmed) and len(trimmed) < MAX_CATEGORY_CHARS:
                category = trimmed
            continue

        first = parts[0]
        if "(insert" in first or "If you" in first or "Here" in first:
            template = first.strip()
            example_url = next((part.strip() for part in parts if "https://" in part), None)
            if len(template) > MIN_TEMPLATE_CHARS:
                templates.append(HookTemplate(template, category, example_url))

    return templates


def load_hook_database(path: Path | None = None, use_cache: bool = True) -> list[HookTemplate]:
    """
    Load and parse the hook database.

    Args:
        path: Database file (default: the packaged ``hook_database.tsv``)
        use_cache: Whether to reuse an earlier parse of the same file

    Returns:
        Templates in file order

    Raises:
        PromptLoadError: If the file cannot be read
    """
    path = path or HOOK_DATABASE_FILE
    if use_cache and path in _database_cache:
        return _database_cache[path]

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        error_msg = f"Error reading hook database: {e}. File: {path}"
        logger.error(error_msg)
        raise PromptLoadError(error_msg) from e

    templates = parse_hook_database(text)
    logger.info(f"Loaded {len(templates)} hook templates from {path.name}")
    _database_cache[path] = templates
    return templates


def clear_hook_database_cache() -> None:
    """Clear the parsed database cache."""
    _database_cache.clear()


# =============================================================================
# Lookup
# =============================================================================


def get_all_categories(templates: list[HookTemplate] | None = None) -> list[str]:
    """Category names in order of first appearance."""
    templates = load_hook_database() if templates is None else templates
    return list(dict.fromkeys(hook.category for hook in templates))


def get_templates_by_category(
    category: str, templates: list[HookTemplate] | None = None
) -> list[HookTemplate]:
    """Templates whose category contains ``category`` (case-insensitive)."""
    templates = load_hook_database() if templates is None else templates
    needle = category.lower()
    return [hook for hook in templates if needle in hook.category.lower()]


def _relevance(hook: HookTemplate, keywords: list[str]) -> int:
    template = hook.template.lower()
    category = hook.category.lower()
    score = 0
    for keyword in keywords:
        if keyword in template:
            score += 2
        if keyword in category:
            score += 3
    score += sum(1 for phrase in BONUS_PHRASES if phrase in template)
    return score


def get_relevant_hook_patterns(
    niche: str, limit: int = 20, templates: list[HookTemplate] | None = None
) -> list[HookTemplate]:
    """
    Rank templates by how well they fit a niche.

    Each niche keyword found in a template scores 2, in its category 3; each
    outcome, pain or audience placeholder adds 1. Ties keep file order.

    Args:
        niche: Free text such as "meal prep busy parents educate"
        limit: Maximum templates to return
        templates: Templates to rank (default: the packaged database)

    Returns:
        Best-fitting templates, best first
    """
    templates = load_hook_database() if templates is None else templates
    keywords = niche.lower().split()
    ranked = sorted(templates, key=lambda hook: _relevance(hook, keywords), reverse=True)
    return ranked[:limit]


def get_hook_pattern_summary(niche: str, templates: list[HookTemplate] | None = None) -> str:
    """Up to three top templates per category, as a Markdown block for the hook prompt."""
    relevant = get_relevant_hook_patterns(niche, 15, templates)
    blocks = []
    for category in dict.fromkeys(hook.category for hook in relevant):
        examples = [hook for hook in relevant if hook.category == category][:3]
        lines = "\n".join(f'- "{hook.template}"' for hook in examples)
        blocks.append(f"**{category}:**\n{lines}")
    return "\n\n".join(blocks) or NO_PATTERNS_MESSAGE


# =============================================================================
# Adaptation
# =============================================================================


def _replacements(context: HookAdaptationContext) -> dict[str, str]:
    topic = context.topic or "this topic"
    audience = context.target_audience or "people"
    replacements = {
        "(insert topic)": topic,
        "(topic)": topic,
        "(target audience)": audience,
        "(insert target audience)": audience,
        "(audience)": audience,
        "(dream result)": context.goal or "achieve their goals",
        "(goal)": context.goal or "success",
        "(pain point)": f"frustration with {context.topic}",
    }

    uav = context.uav
    if uav:
        if uav.unique_intersection:
            replacements["(unique angle)"] = uav.unique_intersection
            replacements["(unique perspective)"] = uav.unique_intersection
        if uav.contrarian_view:
            replacements["(contrarian view)"] = uav.contrarian_view
            replacements["(different approach)"] = uav.contrarian_view
        if uav.proprietary_method:
            replacements["(method)"] = uav.proprietary_method
            replacements["(system)"] = uav.proprietary_method

    spcl = context.spcl
    if spcl:
        if spcl.credibility:
            replacements["(credentials)"] = spcl.credibility[0]
            replacements["(proof)"] = spcl.credibility[0]
        if spcl.power:
            replacements["(authority statement)"] = spcl.power[0]
        if spcl.likeness:
            replacements["(relatable story)"] = spcl.likeness[0]

    proof = context.proof_points
    if proof:
        if proof.results:
            replacements["(specific result)"] = proof.results
            replacements["(result)"] = proof.results
        # Stated credentials win over credibility markers
        if proof.credentials:
            replacements["(credentials)"] = proof.credentials

    return replacements


def adapt_hook_template(template: str, context: HookAdaptationContext) -> str:
    """Fill a template's placeholders with the creator's details.

    Placeholders match case-insensitively. Ones the context cannot fill are
    left in place.
    """
    adapted = template
    for placeholder, value in _replacements(context).items():
        adapted = re.sub(re.escape(placeholder), lambda _: value, adapted, flags=re.IGNORECASE)
    return adapted


def _neural_mechanism(template: str) -> str:
    lower = template.lower()
    if "wait" in lower or "stop" in lower or "before you" in lower:
        return "pattern_interrupt"
    if "you" in lower or "your" in lower:
        return "social_relevance"
    if "truth" in lower or "secret" in lower or "wrong" in lower:
        return "prediction_error"
    return "information_gap"


def _spcl_element(adapted: str) -> str:
    lower = adapted.lower()
    if "$" in lower or "result" in lower or "generated" in lower:
        return "credibility"
    if "should" in lower or "must" in lower or "need to" in lower:
        return "power"
    if "former" in lower or "worked at" in lower or "expert" in lower:
        return "status"
    return "likeness"


def _platform_fit(template: str) -> tuple[str, ...]:
    lower = template.lower()
    fit: list[str] = []
    if "pov" in lower or "watch" in lower:
        fit.extend(["tiktok", "instagram"])
    if "professional" in lower or "industry" in lower:
        fit.append("linkedin")
    return tuple(fit) or ("tiktok", "instagram", "youtube_shorts")


def generate_enhanced_hooks(
    context: HookAdaptationContext,
    count: int = 6,
    templates: list[HookTemplate] | None = None,
) -> list[EnhancedHookTemplate]:
    """
    Adapt the best-fitting templates for a creator and tag each one.

    Tags come from the template wording: the attention mechanism it triggers,
    the SPCL element the adapted text shows off, and the platforms it suits.

    Args:
        context: Creator details
        count: Number of hooks to return
        templates: Templates to draw from (default: the packaged database)

    Returns:
        Up to ``count`` adapted templates, best fit first
    """
    niche = f"{context.topic} {context.target_audience or ''} {context.goal or ''}".strip()
    relevant = get_relevant_hook_patterns(niche, count * 2, templates)

    hooks = []
    for hook in relevant[:count]:
        adapted = adapt_hook_template(hook.template, context)
        mechanism = _neural_mechanism(hook.template)
        hooks.append(
            EnhancedHookTemplate(
                template=adapted,
                category=hook.category,
                example_url=hook.example_url,
                neural_mechanism=mechanism,
                spcl_element=_spcl_element(adapted),
                platform_fit=_platform_fit(hook.template),
                scroll_stop_seconds=1.2 if mechanism == "pattern_interrupt" else 1.8,
                viral_score=8 if hook.example_url else 7,
            )
        )
    logger.debug(f"Generated {len(hooks)} enhanced hooks for niche '{niche}'")
    return hooks
