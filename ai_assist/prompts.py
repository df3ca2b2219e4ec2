"""Prompt templates for the offer-building assistant."""

import json

EXPERT = "You are a direct response marketing expert trained in the methods of Dan Kennedy and Russell Brunson."
JSON_ONLY = "Return ONLY the JSON, no other text."


def problems_prompt(description: str, topic: str) -> str:
    return f"""{EXPERT}

Offer description: "{description}"
Topic: "{topic}"

Generate 5-7 specific, painful problems that the target audience likely experiences related to this offer. Make each problem:
- Specific and relatable
- Emotionally charged (tap into frustration, fear, or desire)
- Something people would pay to solve
- Written in the language the audience uses

Format your response as a JSON array of objects with "title", "description" and "emotional_hook" fields. The emotional_hook is a short phrase that captures why this hurts.

Example format:
[
  {{
    "title": "Spending hours every week manually creating social media content",
    "description": "Every post is written from scratch with no system behind it",
    "emotional_hook": "Stealing time from actually growing your business"
  }}
]

{JSON_ONLY}"""


def product_ideas_prompt(description: str, problems: list) -> str:
    listed = "\n".join(f'- [{p.get("id", "")}] {p.get("title", "")}' for p in problems)
    return f"""{EXPERT}

Offer description: "{description}"

Problems the offer must solve (id in brackets):
{listed}

Generate 6-10 product ideas for this offer. Each idea solves one of the problems above and uses a benefit-driven name.

Format as a JSON array:
[
  {{
    "name": "The 5-Minute Content System",
    "description": "A done-for-you template library",
    "value": 197,
    "delivery_format": "template",
    "solution": "From spending hours to posting in minutes",
    "problem_id": "<id of the problem it solves>"
  }}
]

delivery_format is one of: ebook, course, video series, template, worksheet, checklist, guide, toolkit, software, membership, coaching, consulting.

{JSON_ONLY}"""


def select_products_prompt(description: str, product_ideas: list) -> str:
    listed = json.dumps(
        [{"id": p.get("id"), "name": p.get("name"), "value": p.get("value")} for p in product_ideas],
        indent=2,
    )
    return f"""{EXPERT}

Offer description: "{description}"

Candidate products:
{listed}

Pick the best combination for an irresistible offer: one or two main products and the bonuses that stack the most perceived value on top of them. Leave out weak or redundant ideas.

Format as JSON:
{{
  "main_products": ["<id>"],
  "bonuses": ["<id>", "<id>"],
  "reasoning": "One short paragraph explaining the selection"
}}

{JSON_ONLY}"""


def solutions_prompt(problem: str, topic: str) -> str:
    return f"""{EXPERT}

Topic: "{topic}"
Problem: "{problem}"

Generate 3-4 compelling product/solution ideas that solve this problem. For each solution, provide:
- A catchy, benefit-driven name (using power words and direct response principles)
- A clear description of what it is
- The transformation it provides
- A suggested perceived value ($)
- Key benefits (3-5 bullet points)

Format as a JSON array:
[
  {{
    "name": "The 5-Minute Content System",
    "description": "A done-for-you template library...",
    "transformation": "From spending hours to posting in minutes",
    "suggested_value": 197,
    "benefits": ["Benefit 1", "Benefit 2"]
  }}
]

{JSON_ONLY}"""


def tasks_prompt(product_name: str, product_description: str) -> str:
    return f"""You are a product launch expert. Given this product:

Name: "{product_name}"
Description: "{product_description}"

Generate 5-8 specific tasks needed to create and launch this product. Make tasks:
- Actionable and specific
- In logical order
- Realistic and achievable
- Include both creation and delivery tasks

For each task, also suggest 2-4 subtasks.

Format as a JSON array:
[
  {{
    "title": "Create product outline and structure",
    "description": "Map out all modules and lessons",
    "priority": "HIGH",
    "estimated_days": 3,
    "subtasks": ["Research competitor products", "Create module list", "Define learning outcomes"]
  }}
]

Priority can be: "LOW", "MEDIUM", or "HIGH"

{JSON_ONLY}"""


def names_prompt(current_name: str, context: str) -> str:
    return f"""You are a direct response copywriting expert trained in Dan Kennedy and Russell Brunson's methods.

Current Name: "{current_name}"
Context: "{context}"

Generate 5 alternative names that are:
- More compelling and benefit-driven
- Use power words and emotional triggers
- Follow direct response naming conventions
- Easier to remember and share

Return as a JSON array of strings:
["Name 1", "Name 2", "Name 3", "Name 4", "Name 5"]

{JSON_ONLY}"""
