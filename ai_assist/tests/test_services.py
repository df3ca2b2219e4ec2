# ai_assist/tests/test_services.py
import json
from types import SimpleNamespace
from unittest import mock

from django.test import SimpleTestCase, override_settings

from ai_assist import client, fallbacks, services


def reply(data):
    return mock.patch("ai_assist.client.complete", return_value=json.dumps(data))


PROBLEMS = [{"id": "problem-1", "title": "No time"}, {"id": "problem-2", "title": "No ideas"}]


class ClientTests(SimpleTestCase):
    def test_parse_json_strips_code_fence(self):
        self.assertEqual(client.parse_json('```json\n[1, 2]\n```'), [1, 2])
        self.assertEqual(client.parse_json("  {\"a\": 1} "), {"a": 1})

    @override_settings(ANTHROPIC_API_KEY="your_anthropic_api_key_here")
    def test_placeholder_key_counts_as_unset(self):
        self.assertFalse(client.is_configured())
        with self.assertRaises(client.AIUnavailable):
            client.complete("hi")

    @override_settings(ANTHROPIC_API_KEY="sk-test", ANTHROPIC_MODEL="test-model", ANTHROPIC_MAX_TOKENS=123)
    def test_complete_returns_first_text_block(self):
        message = SimpleNamespace(
            content=[SimpleNamespace(type="tool_use"), SimpleNamespace(type="text", text="hello")]
        )
        with mock.patch("ai_assist.client.Anthropic") as anthropic_cls:
            anthropic_cls.return_value.messages.create.return_value = message
            self.assertEqual(client.complete("prompt"), "hello")
        kwargs = anthropic_cls.return_value.messages.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["max_tokens"], 123)
        self.assertEqual(kwargs["messages"], [{"role": "user", "content": "prompt"}])

    @override_settings(ANTHROPIC_API_KEY="sk-test")
    def test_complete_without_text_block_raises(self):
        with mock.patch("ai_assist.client.Anthropic") as anthropic_cls:
            anthropic_cls.return_value.messages.create.return_value = SimpleNamespace(content=[])
            with self.assertRaises(client.AIResponseError):
                client.complete("prompt")


class FallbackTests(SimpleTestCase):
    @override_settings(ANTHROPIC_API_KEY="")
    def test_missing_key_returns_fallback(self):
        payload, used_fallback = services.generate_problems("An offer", "content")
        self.assertTrue(used_fallback)
        self.assertEqual(payload, fallbacks.problems())
        self.assertEqual(payload[0]["id"], "problem-1")

    def test_provider_error_returns_fallback_and_logs(self):
        with mock.patch("ai_assist.client.complete", side_effect=RuntimeError("rate limited")):
            with self.assertLogs("ai_assist.services", level="WARNING"):
                payload, used_fallback = services.generate_tasks("Course")
        self.assertTrue(used_fallback)
        self.assertEqual(payload, fallbacks.tasks())

    def test_non_json_reply_returns_fallback(self):
        with mock.patch("ai_assist.client.complete", return_value="Sure! Here are some names."):
            with self.assertLogs("ai_assist.services", level="WARNING"):
                payload, used_fallback = services.improve_name("Course")
        self.assertTrue(used_fallback)
        self.assertEqual(payload, fallbacks.names())

    def test_wrong_shape_returns_fallback(self):
        with reply({"not": "a list"}):
            with self.assertLogs("ai_assist.services", level="WARNING"):
                payload, used_fallback = services.generate_solutions("No time")
        self.assertTrue(used_fallback)
        self.assertEqual(payload, fallbacks.solutions())

    def test_fallback_ideas_link_round_robin(self):
        ideas = fallbacks.product_ideas(PROBLEMS)
        self.assertEqual([i["problem_id"] for i in ideas], ["problem-1", "problem-2", "problem-1", "problem-2"])
        self.assertEqual([i["id"] for i in ideas], ["product-1", "product-2", "product-3", "product-4"])

    def test_fallback_selection_picks_highest_value_first_on_ties(self):
        ideas = [
            {"id": "a", "value": 100},
            {"id": "b", "value": 300},
            {"id": "c", "value": 300},
            {"id": "d", "value": 50},
        ]
        selection = fallbacks.product_selection(ideas)
        self.assertEqual(selection["main_products"], ["b"])
        self.assertEqual(selection["bonuses"], ["a", "c", "d"])

    def test_fallback_data_is_not_shared(self):
        first = fallbacks.tasks()
        first[0]["title"] = "changed"
        self.assertNotEqual(fallbacks.tasks()[0]["title"], "changed")


class ModelAnswerTests(SimpleTestCase):
    def test_problems_get_ids_and_snake_case_fields(self):
        with reply([{"title": "A", "emotionalHook": "ouch"}, {"problem": "B", "description": "d"}]):
            payload, used_fallback = services.generate_problems("An offer")
        self.assertFalse(used_fallback)
        self.assertEqual(
            payload,
            [
                {"id": "problem-1", "title": "A", "description": "", "emotional_hook": "ouch"},
                {"id": "problem-2", "title": "B", "description": "d", "emotional_hook": ""},
            ],
        )

    def test_product_ideas_keep_only_known_problem_links(self):
        answer = [
            {"name": "Kit", "value": "197", "problem_id": "problem-2"},
            {"name": "Course", "value": -5, "problemId": "problem-9", "deliveryFormat": "course"},
        ]
        with reply(answer):
            payload, used_fallback = services.generate_product_ideas("An offer", PROBLEMS)
        self.assertFalse(used_fallback)
        self.assertEqual(payload[0]["id"], "product-1")
        self.assertEqual(payload[0]["value"], 197)
        self.assertEqual(payload[0]["problem_id"], "problem-2")
        self.assertEqual(payload[1]["value"], 0)
        self.assertIsNone(payload[1]["problem_id"])
        self.assertEqual(payload[1]["delivery_format"], "course")
        self.assertFalse(payload[1]["is_bonus"])

    def test_selection_drops_unknown_ids_and_overlaps(self):
        ideas = [{"id": "product-1", "value": 10}, {"id": "product-2", "value": 20}]
        answer = {"main_products": ["product-2", "ghost"], "bonuses": ["product-1", "product-2"], "reasoning": "r"}
        with reply(answer):
            payload, used_fallback = services.select_best_products("An offer", ideas)
        self.assertFalse(used_fallback)
        self.assertEqual(payload, {"main_products": ["product-2"], "bonuses": ["product-1"], "reasoning": "r"})

    def test_selection_without_main_product_falls_back(self):
        ideas = [{"id": "product-1", "value": 10}]
        with reply({"main_products": [], "bonuses": ["product-1"]}):
            with self.assertLogs("ai_assist.services", level="WARNING"):
                payload, used_fallback = services.select_best_products("An offer", ideas)
        self.assertTrue(used_fallback)
        self.assertEqual(payload["main_products"], ["product-1"])

    def test_task_priority_is_normalised(self):
        answer = [
            {"title": "A", "priority": "urgent", "estimated_days": 2, "subtasks": ["x", "", 3]},
            {"title": "B", "priority": "high", "estimatedDays": "soon"},
        ]
        with reply(answer):
            payload, used_fallback = services.generate_tasks("Course", "desc")
        self.assertFalse(used_fallback)
        self.assertEqual(payload[0]["priority"], "MEDIUM")
        self.assertEqual(payload[0]["subtasks"], ["x"])
        self.assertEqual(payload[0]["estimated_days"], 2)
        self.assertEqual(payload[1]["priority"], "HIGH")
        self.assertIsNone(payload[1]["estimated_days"])

    def test_solutions_and_names(self):
        with reply([{"name": "Kit", "suggestedValue": 97.5, "benefits": ["fast"]}]):
            solutions, used_fallback = services.generate_solutions("No time", "content")
        self.assertFalse(used_fallback)
        self.assertEqual(solutions[0]["suggested_value"], 97.5)
        self.assertEqual(solutions[0]["benefits"], ["fast"])

        with mock.patch("ai_assist.client.complete", return_value='```json\n["One", " Two "]\n```'):
            names, used_fallback = services.improve_name("Course")
        self.assertFalse(used_fallback)
        self.assertEqual(names, ["One", "Two"])
