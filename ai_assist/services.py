"""AI assistant operations.

Each operation asks the LLM for JSON, checks the shape of the answer and
normalises it. None of them raises: a missing key, a provider error, text
that is not JSON or JSON of the wrong shape all yield the deterministic
fallback from `ai_assist.fallbacks`. Every operation returns
`(payload, used_fallback)`.
"""

import logging
from decimal import Decimal, InvalidOperation

from . import client, fallbacks, prompts

logger = logging.getLogger(__name__)

PRIORITIES = ("LOW", "MEDIUM", "HIGH")


# --------------------------- helpers (pure functions) ---------------------------

def _ask(label, prompt, shape, fallback, max_tokens=None):
    try:
        payload = shape(client.parse_json(client.complete(prompt, max_tokens)))
    except client.AIUnavailable:
        logger.info("%s: no API key configured, using fallback data", label)
        return fallback(), True
    except Exception:
        # Any provider or parsing failure degrades to canned data.
        logger.warning("%s failed, using fallback data", label, exc_info=True)
        return fallback(), True
    return payload, False


def _require_list(data, what):
    if not isinstance(data, list) or not data:
        raise ValueError(f"expected a non-empty list of {what}")
    return data


def _text(item, *keys, default=""):
    for key in keys:
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return default


def _number(value, default=0):
    try:
        number = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return default
    if number < 0:
        return default
    return int(number) if number == number.to_integral_value() else float(number)


def _strings(value):
    if not isinstance(value, list):
        return []
    return [s.strip() for s in value if isinstance(s, str) and s.strip()]


def _shape_problems(data):
    problems = []
    for item in _require_list(data, "problems"):
        if not isinstance(item, dict):
            raise ValueError("problem entries must be objects")
        title = _text(item, "title", "problem")
        if not title:
            raise ValueError("problem without a title")
        problems.append(
            {
                "id": f"problem-{len(problems) + 1}",
                "title": title,
                "description": _text(item, "description"),
                "emotional_hook": _text(item, "emotional_hook", "emotionalHook"),
            }
        )
    return problems


def _shape_product_ideas(data, known_problem_ids):
    ideas = []
    for item in _require_list(data, "product ideas"):
        if not isinstance(item, dict):
            raise ValueError("product idea entries must be objects")
        name = _text(item, "name")
        if not name:
            raise ValueError("product idea without a name")
        problem_id = item.get("problem_id", item.get("problemId"))
        ideas.append(
            {
                "id": f"product-{len(ideas) + 1}",
                "name": name,
                "description": _text(item, "description"),
                "value": _number(item.get("value")),
                "delivery_format": _text(item, "delivery_format", "deliveryFormat", default="ebook"),
                "solution": _text(item, "solution"),
                "problem_id": problem_id if problem_id in known_problem_ids else None,
                "is_bonus": False,
            }
        )
    return ideas


def _shape_selection(data, known_ids):
    if not isinstance(data, dict):
        raise ValueError("expected a selection object")
    main = [pid for pid in data.get("main_products", data.get("mainProducts", [])) if pid in known_ids]
    bonuses = [pid for pid in data.get("bonuses", []) if pid in known_ids and pid not in main]
    if not main:
        raise ValueError("selection without a main product")
    return {"main_products": main, "bonuses": bonuses, "reasoning": _text(data, "reasoning")}


def _shape_solutions(data):
    solutions = []
    for item in _require_list(data, "solutions"):
        if not isinstance(item, dict) or not _text(item, "name"):
            raise ValueError("solution without a name")
        solutions.append(
            {
                "name": _text(item, "name"),
                "description": _text(item, "description"),
                "transformation": _text(item, "transformation"),
                "suggested_value": _number(item.get("suggested_value", item.get("suggestedValue"))),
                "benefits": _strings(item.get("benefits")),
            }
        )
    return solutions


def _shape_tasks(data):
    tasks = []
    for item in _require_list(data, "tasks"):
        if not isinstance(item, dict) or not _text(item, "title"):
            raise ValueError("task without a title")
        priority = _text(item, "priority").upper()
        days = item.get("estimated_days", item.get("estimatedDays"))
        tasks.append(
            {
                "title": _text(item, "title"),
                "description": _text(item, "description"),
                "priority": priority if priority in PRIORITIES else "MEDIUM",
                "estimated_days": days if isinstance(days, int) and days >= 0 else None,
                "subtasks": _strings(item.get("subtasks")),
            }
        )
    return tasks


def _shape_names(data):
    names = _strings(_require_list(data, "names"))
    if not names:
        raise ValueError("no usable names")
    return names


# ---------------------------------- operations ----------------------------------

def generate_problems(description: str, topic: str = ""):
    return _ask(
        "generate_problems",
        prompts.problems_prompt(description, topic),
        _shape_problems,
        fallbacks.problems,
    )


def generate_product_ideas(description: str, problems: list):
    known = {p.get("id") for p in problems if p.get("id")}
    return _ask(
        "generate_product_ideas",
        prompts.product_ideas_prompt(description, problems),
        lambda data: _shape_product_ideas(data, known),
        lambda: fallbacks.product_ideas(problems),
        max_tokens=3000,
    )


def select_best_products(description: str, product_ideas: list):
    known = {p.get("id") for p in product_ideas if p.get("id") is not None}
    return _ask(
        "select_best_products",
        prompts.select_products_prompt(description, product_ideas),
        lambda data: _shape_selection(data, known),
        lambda: fallbacks.product_selection(product_ideas),
    )


def generate_solutions(problem: str, topic: str = ""):
    return _ask(
        "generate_solutions",
        prompts.solutions_prompt(problem, topic),
        _shape_solutions,
        fallbacks.solutions,
    )


def generate_tasks(product_name: str, product_description: str = ""):
    return _ask(
        "generate_tasks",
        prompts.tasks_prompt(product_name, product_description),
        _shape_tasks,
        fallbacks.tasks,
    )


def improve_name(current_name: str, context: str = ""):
    return _ask(
        "improve_name",
        prompts.names_prompt(current_name, context),
        _shape_names,
        fallbacks.names,
        max_tokens=500,
    )
