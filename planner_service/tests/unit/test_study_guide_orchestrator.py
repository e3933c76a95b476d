import functools
import json
import unittest
from datetime import date

from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from smartstudy.clients.llm_client import StudyGuideClient
from smartstudy.orchestrators.study_guide_orchestrator import (
    MAX_RETRIES,
    StudyGuideError,
    generate_study_guide,
    parse_study_guide,
)
from smartstudy.schemas.shared import EventType, StudyGuide
from smartstudy.services.event_extractor import StudyEvent
from smartstudy.services.plan_synthesizer import GuideTarget, synthesize_plan
from smartstudy.services.study_guide_templates import build_fallback_study_guide

VALID_GUIDE = {
    "howToComplete": ["Read chapter 4", "Do the practice set", "Check answers"],
    "guides": ["Use flashcards", "Study in short blocks", "Sleep well"],
    "suggestions": "Keep it steady today.",
    "motivation": ["You've got this.", "One step at a time.", "Nearly there."],
}

TARGET = GuideTarget("Physics Exam", "Physics", EventType.EXAM, date(2024, 1, 4), 2)


def _client_for(model, api_key="nvapi-test"):
    return StudyGuideClient(
        model_name="test-model",
        temperature=0.3,
        max_tokens=256,
        api_key=api_key,
        factory=lambda **kwargs: model,
    )


class TestParseStudyGuide(unittest.TestCase):
    def test_parses_plain_json(self):
        guide = parse_study_guide(json.dumps(VALID_GUIDE))
        self.assertEqual(guide.model_dump(), VALID_GUIDE)

    def test_strips_markdown_fences(self):
        text = "```json\n" + json.dumps(VALID_GUIDE) + "\n```"
        self.assertEqual(parse_study_guide(text).suggestions, "Keep it steady today.")

    def test_rejects_non_json(self):
        with self.assertRaises(StudyGuideError):
            parse_study_guide("Sure! Here is your plan: study hard.")

    def test_rejects_empty_output(self):
        with self.assertRaises(StudyGuideError):
            parse_study_guide("   ")

    def test_rejects_json_arrays(self):
        with self.assertRaises(StudyGuideError):
            parse_study_guide(json.dumps([VALID_GUIDE]))

    def test_rejects_wrong_list_lengths(self):
        bad = dict(VALID_GUIDE, motivation=["Only one"])
        with self.assertRaises(StudyGuideError) as exc:
            parse_study_guide(json.dumps(bad))
        self.assertIn("motivation", str(exc.exception))

    def test_rejects_missing_fields(self):
        bad = {k: v for k, v in VALID_GUIDE.items() if k != "suggestions"}
        with self.assertRaises(StudyGuideError):
            parse_study_guide(json.dumps(bad))

    def test_rejects_missing_motivation(self):
        bad = {k: v for k, v in VALID_GUIDE.items() if k != "motivation"}
        with self.assertRaises(StudyGuideError) as exc:
            parse_study_guide(json.dumps(bad))
        self.assertIn("motivation", str(exc.exception))

    def test_rejects_string_motivation(self):
        bad = dict(VALID_GUIDE, motivation="keep going")
        with self.assertRaises(StudyGuideError) as exc:
            parse_study_guide(json.dumps(bad))
        self.assertIn("motivation", str(exc.exception))

    def test_rejects_non_string_items(self):
        bad = dict(VALID_GUIDE, guides=["Use flashcards", 2, "Sleep well"])
        with self.assertRaises(StudyGuideError):
            parse_study_guide(json.dumps(bad))


class TestGenerateStudyGuide(unittest.IsolatedAsyncioTestCase):
    async def test_returns_validated_guide(self):
        client = _client_for(FakeListChatModel(responses=[json.dumps(VALID_GUIDE)]))
        guide = await generate_study_guide(client, TARGET)
        self.assertEqual(guide.model_dump(), VALID_GUIDE)

    async def test_prompt_describes_event_and_timing(self):
        seen = []

        def capture(prompt_value):
            seen.append(prompt_value.to_string())
            return AIMessage(content=json.dumps(VALID_GUIDE))

        client = _client_for(RunnableLambda(capture))
        await generate_study_guide(client, TARGET)

        self.assertEqual(len(seen), 1)
        self.assertIn("Event: Physics Exam", seen[0])
        self.assertIn("Event date: 2024-01-04", seen[0])
        self.assertIn("2 days until the event", seen[0])
        self.assertIn("valid JSON", seen[0])

    async def test_retries_after_invalid_output(self):
        model = FakeListChatModel(responses=["not json", json.dumps(VALID_GUIDE)])
        guide = await generate_study_guide(_client_for(model), TARGET)
        self.assertEqual(guide.suggestions, VALID_GUIDE["suggestions"])

    async def test_raises_after_all_attempts_fail(self):
        model = FakeListChatModel(responses=["nope"] * MAX_RETRIES)
        with self.assertRaises(StudyGuideError) as exc:
            await generate_study_guide(_client_for(model), TARGET)
        self.assertIn(f"All {MAX_RETRIES} attempts failed", str(exc.exception))

    async def test_plan_replaces_guides_without_list_motivation(self):
        bad = dict(VALID_GUIDE, motivation="keep going")
        client = _client_for(FakeListChatModel(responses=[json.dumps(bad)]))
        events = [StudyEvent("Physics", EventType.EXAM, date(2024, 1, 1))]

        plan = await synthesize_plan(events, date(2024, 1, 1), functools.partial(generate_study_guide, client))

        self.assertEqual(len(plan), 1)
        self.assertEqual(
            StudyGuide.model_validate_json(plan[0].notes),
            build_fallback_study_guide(EventType.EXAM, "Physics", 0),
        )

    async def test_unconfigured_client_is_rejected_without_calling_model(self):
        calls = []

        def factory(**kwargs):
            calls.append(kwargs)
            return FakeListChatModel(responses=[json.dumps(VALID_GUIDE)])

        client = StudyGuideClient("test-model", 0.3, 256, api_key="", factory=factory)
        with self.assertRaises(StudyGuideError):
            await generate_study_guide(client, TARGET)
        self.assertEqual(calls, [])


if __name__ == "__main__":
    unittest.main()
