"""Deterministic stand-ins returned when the LLM is unavailable or misbehaves."""

from copy import deepcopy
from decimal import Decimal, InvalidOperation

FALLBACK_PROBLEMS = [
    {
        "title": "Spending hours creating content that gets zero engagement",
        "description": "Posts go out regularly but nobody comments, shares or buys.",
        "emotional_hook": "Wasting time while competitors steal your audience",
    },
    {
        "title": "Struggling to come up with fresh content ideas consistently",
        "description": "Every week starts with a blank page and no plan.",
        "emotional_hook": "Feeling stuck and uninspired every single day",
    },
    {
        "title": "Not knowing which content actually converts followers to customers",
        "description": "There is no link between what gets published and what gets sold.",
        "emotional_hook": "Working hard but seeing no revenue",
    },
    {
        "title": "Missing out on trends because you're too busy creating content",
        "description": "By the time a post is ready the conversation has moved on.",
        "emotional_hook": "Always one step behind the competition",
    },
    {
        "title": "Juggling multiple platforms without a clear strategy",
        "description": "Each channel gets a little attention and none of them grows.",
        "emotional_hook": "Feeling overwhelmed and burned out",
    },
]

FALLBACK_PRODUCT_IDEAS = [
    {
        "name": "The 30-Day Content Calendar",
        "description": "A month of planned posts with hooks, captions and calls to action.",
        "value": 197,
        "delivery_format": "template",
        "solution": "Never face a blank page again",
    },
    {
        "name": "Engagement Accelerator Video Series",
        "description": "Short lessons on writing posts people actually respond to.",
        "value": 297,
        "delivery_format": "video series",
        "solution": "Turn silent followers into active commenters",
    },
    {
        "name": "Content-to-Cash Conversion Checklist",
        "description": "A step-by-step checklist for linking every post to an offer.",
        "value": 97,
        "delivery_format": "checklist",
        "solution": "Know exactly which content makes money",
    },
    {
        "name": "Trend Radar Swipe File",
        "description": "Ready-to-adapt templates for jumping on trends within hours.",
        "value": 67,
        "delivery_format": "toolkit",
        "solution": "Be first to the conversation instead of last",
    },
]

FALLBACK_SOLUTIONS = [
    {
        "name": "The Done-For-You Solution Kit",
        "description": "Templates and walkthroughs that remove the problem step by step.",
        "transformation": "From stuck and frustrated to a working system in days",
        "suggested_value": 197,
        "benefits": [
            "Ready to use the same day",
            "No guesswork about what to do next",
            "Proven structure you can reuse",
        ],
    },
    {
        "name": "The Fast-Track Video Workshop",
        "description": "A recorded workshop that walks through the fix live.",
        "transformation": "From confusion to clarity in one afternoon",
        "suggested_value": 297,
        "benefits": [
            "Watch once, apply immediately",
            "See every step demonstrated",
            "Lifetime access to the recordings",
        ],
    },
    {
        "name": "The Quick-Win Checklist",
        "description": "A one-page checklist covering the critical actions.",
        "transformation": "From overwhelmed to in control",
        "suggested_value": 47,
        "benefits": [
            "Fits on a single page",
            "Takes minutes to complete",
            "Keeps you focused on what matters",
        ],
    },
]

FALLBACK_TASKS = [
    {
        "title": "Create product outline and structure",
        "description": "Map out all modules, sections and deliverables.",
        "priority": "HIGH",
        "estimated_days": 3,
        "subtasks": ["Research competitor products", "Create module list", "Define learning outcomes"],
    },
    {
        "title": "Produce the core content",
        "description": "Write, record or build the main deliverable.",
        "priority": "HIGH",
        "estimated_days": 7,
        "subtasks": ["Draft the content", "Review and edit", "Finalize assets"],
    },
    {
        "title": "Set up delivery",
        "description": "Make the product available to buyers.",
        "priority": "MEDIUM",
        "estimated_days": 2,
        "subtasks": ["Choose delivery platform", "Upload content", "Test the buyer experience"],
    },
    {
        "title": "Prepare launch materials",
        "description": "Sales copy, emails and graphics for the launch.",
        "priority": "MEDIUM",
        "estimated_days": 3,
        "subtasks": ["Write sales page copy", "Draft launch emails", "Create graphics"],
    },
    {
        "title": "Collect feedback after launch",
        "description": "Gather early buyer feedback and fix rough edges.",
        "priority": "LOW",
        "estimated_days": 2,
        "subtasks": ["Send feedback survey", "Review responses"],
    },
]

FALLBACK_NAMES = [
    "The Ultimate Content Creation System",
    "7-Day Content Accelerator Program",
    "Done-For-You Content Templates Pack",
]


def problems():
    return [dict(p, id=f"problem-{i}") for i, p in enumerate(deepcopy(FALLBACK_PROBLEMS), start=1)]


def product_ideas(problem_list):
    """Canned ideas, linked round-robin to the given problems."""
    problem_ids = [p.get("id") for p in problem_list or [] if p.get("id")]
    ideas = []
    for i, idea in enumerate(deepcopy(FALLBACK_PRODUCT_IDEAS), start=1):
        idea["id"] = f"product-{i}"
        idea["problem_id"] = problem_ids[(i - 1) % len(problem_ids)] if problem_ids else None
        idea["is_bonus"] = False
        ideas.append(idea)
    return ideas


def _value_of(idea):
    try:
        return Decimal(str(idea.get("value", 0)))
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")


def product_selection(ideas):
    """Highest-value idea (first on ties) as the main product, the rest as bonuses."""
    ids = [i.get("id") for i in ideas if i.get("id") is not None]
    if not ids:
        return {"main_products": [], "bonuses": [], "reasoning": "No product ideas to choose from."}
    candidates = [i for i in ideas if i.get("id") is not None]
    best = candidates[0]
    for idea in candidates[1:]:
        if _value_of(idea) > _value_of(best):
            best = idea
    return {
        "main_products": [best["id"]],
        "bonuses": [pid for pid in ids if pid != best["id"]],
        "reasoning": (
            "The highest-value idea anchors the offer as the main product; "
            "the remaining ideas are stacked as bonuses to raise the perceived value."
        ),
    }


def solutions():
    return deepcopy(FALLBACK_SOLUTIONS)


def tasks():
    return deepcopy(FALLBACK_TASKS)


def names():
    return list(FALLBACK_NAMES)
