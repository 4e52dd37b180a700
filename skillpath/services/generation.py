"""AI content generation through an OpenAI-compatible chat API.

Three generators back the content endpoints:

- learning modules for a student's level and subject
- multiple-choice questions for one module
- teacher lesson / academic text

Model output is untrusted: JSON is extracted leniently (code fences and
thinking tags stripped) and then validated item by item. Anything unusable
raises GenerationError.
"""
from __future__ import annotations

import json
import re
import time
from typing import Any

import structlog
from openai import OpenAI, OpenAIError

from skillpath.core.config import Settings, get_settings
from skillpath.core.errors import GenerationError
from skillpath.models.profile import SKILL_LEVELS
from skillpath.schemas.generation import GenerateModulesSchema, LessonGenerateSchema
from skillpath.services.scoring import calculate_points_reward, module_level

logger = structlog.get_logger(__name__)

SANITIZE_PATTERNS = [
    re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE),
    re.compile(r"<reasoning>.*?</reasoning>", re.DOTALL | re.IGNORECASE),
]
FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

MODULES_SYSTEM_PROMPT = (
    "You design short learning modules for secondary school students. "
    "Respond with JSON only: {\"modules\": [{\"title\", \"description\", "
    "\"detailed_content\", \"difficulty\", \"estimated_duration\", \"category\"}]}. "
    "difficulty is one of beginner, intermediate, advanced; estimated_duration is minutes."
)

QUIZ_SYSTEM_PROMPT = (
    "You write multiple-choice quiz questions. Respond with JSON only: "
    "{\"quizzes\": [{\"question\", \"options\": [4 strings], \"correct_answer\"}]}. "
    "correct_answer must be exactly one of the options."
)

LESSON_SYSTEM_PROMPT = (
    "You are an experienced teacher preparing classroom material. "
    "Write clear, well-structured markdown suitable for the requested grade."
)

LANGUAGE_NAMES = {"en": "English", "sw": "Kiswahili"}


def extract_json(text: str) -> Any:
    """Parse JSON from model output: direct, fenced block, then first {...} span."""
    content = text or ""
    for pattern in SANITIZE_PATTERNS:
        content = pattern.sub("", content)
    content = content.strip()

    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    match = FENCE_RE.search(content)
    if match:
        try:
            return json.loads(match.group(1).strip())
        except json.JSONDecodeError:
            pass

    start = content.find("{")
    end = content.rfind("}") + 1
    if start >= 0 and end > start:
        try:
            return json.loads(content[start:end])
        except json.JSONDecodeError:
            pass

    raise GenerationError("Content provider returned invalid JSON")


def _items(payload: Any, key: str) -> list:
    if isinstance(payload, dict):
        payload = payload.get(key)
    if not isinstance(payload, list):
        raise GenerationError(f"Content provider response has no '{key}' list")
    return payload


def normalize_difficulty(value: Any) -> str:
    difficulty = str(value or "").strip().lower()
    return difficulty if difficulty in SKILL_LEVELS else "beginner"


def normalize_modules(payload: Any, level: int = 1) -> list[dict]:
    """Validated module dicts ready for LearningModule(**m); bad items are dropped."""
    modules = []
    for raw in _items(payload, "modules"):
        if not isinstance(raw, dict) or not str(raw.get("title") or "").strip():
            continue
        difficulty = normalize_difficulty(raw.get("difficulty"))
        try:
            duration = max(int(raw.get("estimated_duration") or 30), 1)
        except (TypeError, ValueError):
            duration = 30
        modules.append(
            {
                "title": str(raw["title"]).strip()[:255],
                "description": str(raw.get("description") or "").strip(),
                "content": str(raw.get("detailed_content") or raw.get("content") or "").strip(),
                "difficulty": difficulty,
                "category": str(raw.get("category") or "general").strip()[:128],
                "estimated_duration": duration,
                "points_reward": calculate_points_reward(duration, difficulty),
                "order_index": level,
            }
        )
    if not modules:
        raise GenerationError("Content provider returned no usable modules")
    return modules


def normalize_questions(payload: Any) -> list[dict]:
    """Questions with string ids; each needs 2+ options and an answer among them."""
    questions = []
    for raw in _items(payload, "quizzes"):
        if not isinstance(raw, dict):
            continue
        question = str(raw.get("question") or "").strip()
        options = raw.get("options")
        if isinstance(options, str):
            try:
                options = json.loads(options)
            except json.JSONDecodeError:
                continue
        if not question or not isinstance(options, list):
            continue
        options = [str(o).strip() for o in options if str(o).strip()]
        answer = str(raw.get("correct_answer") or "").strip()
        if len(options) < 2 or answer not in options:
            continue
        questions.append(
            {
                "id": f"q{len(questions) + 1}",
                "question": question,
                "options": options,
                "correct_answer": answer,
            }
        )
    if not questions:
        raise GenerationError("Content provider returned no usable questions")
    return questions


class ContentGenerator:
    """Thin wrapper over the chat completions API."""

    def __init__(self, settings: Settings | None = None, client: OpenAI | None = None):
        self.settings = settings or get_settings()
        self._client = client or OpenAI(
            base_url=self.settings.llm_base_url,
            api_key=self.settings.llm_api_key or "not-needed",
            timeout=self.settings.llm_timeout_seconds,
        )

    def chat(self, system: str, user: str, json_mode: bool = False) -> str:
        request_kwargs: dict[str, Any] = {
            "model": self.settings.llm_model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": self.settings.llm_temperature,
        }
        if json_mode:
            request_kwargs["response_format"] = {"type": "json_object"}

        start_time = time.time()
        try:
            response = self._client.chat.completions.create(**request_kwargs)
        except OpenAIError as e:
            logger.error("llm_request_failed", model=self.settings.llm_model, error=str(e))
            raise GenerationError("Content provider request failed") from e

        if not response.choices:
            raise GenerationError("Content provider returned an empty response")
        logger.debug(
            "llm_response",
            model=self.settings.llm_model,
            latency_ms=int((time.time() - start_time) * 1000),
        )
        return response.choices[0].message.content or ""

    def generate_modules(
        self,
        request: GenerateModulesSchema,
        subject: str | None = None,
        form: str | None = None,
    ) -> list[dict]:
        """Modules for the request; `subject` and `form` fall back to the request's own."""
        level = module_level(request.completed_modules)
        subject = subject or request.student_subject
        form = form or request.student_form
        prompt = (
            f"Create {request.count} new learning modules for a student at '{request.current_level}' "
            f"who has completed {request.completed_modules} modules."
        )
        if subject:
            prompt += f" Subject: {subject}."
        if form:
            prompt += f" Class: {form}."
        payload = extract_json(self.chat(MODULES_SYSTEM_PROMPT, prompt, json_mode=True))
        return normalize_modules(payload, level=level)[: request.count]

    def generate_questions(
        self,
        title: str,
        content: str,
        difficulty: str,
        subject: str | None = None,
        count: int = 5,
    ) -> list[dict]:
        prompt = (
            f"Write {count} {difficulty} questions for the module '{title}'.\n"
            f"Module content:\n{content[:4000]}"
        )
        if subject:
            prompt += f"\nSubject: {subject}"
        payload = extract_json(self.chat(QUIZ_SYSTEM_PROMPT, prompt, json_mode=True))
        return normalize_questions(payload)[:count]

    def generate_lesson(self, request: LessonGenerateSchema) -> str:
        language = LANGUAGE_NAMES.get(request.lang, "English")
        if request.content_type == "lesson":
            prompt = (
                f"Write a {request.lesson_type or 'standard'} lesson "
                f"({request.material_type or 'notes'}) on '{request.topic}' for {request.grade}."
            )
        else:
            prompt = (
                f"Write {request.academic_format or 'notes'} of {request.length or 'medium'} length "
                f"on '{request.topic}' for {request.grade}."
            )
        if request.quiz_type:
            prompt += f" Finish with a {request.quiz_type} quiz."
        prompt += f" Write in {language}."

        content = self.chat(LESSON_SYSTEM_PROMPT, prompt).strip()
        if not content:
            raise GenerationError("Content provider returned no lesson text")
        return content


def get_content_generator() -> ContentGenerator:
    return ContentGenerator()
