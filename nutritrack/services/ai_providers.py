"""Generative AI providers for food analysis, meal plans, recipes and coaching."""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

import httpx

from nutritrack.config import Settings, get_settings
from nutritrack.errors import ExternalServiceError


logger = logging.getLogger(__name__)

_JSON_PATTERNS = {
    "object": re.compile(r"\{[\s\S]*\}"),
    "array": re.compile(r"\[[\s\S]*\]"),
}


def extract_json(text: Optional[str], kind: Literal["object", "array"] = "object") -> Any:
    """Parse the first embedded JSON object or array out of a model response."""
    match = _JSON_PATTERNS[kind].search(text or "")
    if not match:
        raise ExternalServiceError(f"No JSON {kind} found in AI response")
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ExternalServiceError(f"Unparseable JSON {kind} in AI response: {e}") from e


FOOD_ANALYSIS_PROMPT = """Analyze {subject}

Return a JSON object with this exact structure:
{{
    "foods": [
        {{"name": str, "calories": number, "protein": number, "carbs": number, "fat": number,
          "fiber": number, "sugar": number, "quantity": "estimated portion size"}}
    ],
    "totalCalories": number,
    "analysis": "Brief nutritional analysis and health insights"
}}

If multiple foods are detected, include each as a separate object in the foods array.
Provide realistic nutritional values based on standard serving sizes."""


MEAL_PLAN_PROMPT = """Generate a daily meal plan with these preferences:
- Diet Type: {diet_type}
- Target Calories: {calories}
- Number of Meals: {meals}
- Allergies to Avoid: {allergies}
- Food Preferences: {preferences}

Return a JSON object with this exact structure:
{{
    "meals": [
        {{
            "name": str,
            "type": "breakfast|lunch|dinner|snack",
            "calories": number,
            "ingredients": [str],
            "instructions": [str],
            "prepTime": number,
            "nutrition": {{"protein": number, "carbs": number, "fat": number, "fiber": number}}
        }}
    ],
    "totalCalories": number,
    "analysis": str
}}

Create balanced, healthy meals that meet the calorie target and dietary preferences."""


RECIPE_PROMPT = """Generate 3 recipe recommendations for: "{query}"

Consider these dietary preferences: {diets}

Return a JSON array with this exact structure:
[
    {{
        "id": str,
        "name": str,
        "description": str,
        "ingredients": [str],
        "instructions": [str],
        "prepTime": number,
        "cookTime": number,
        "servings": number,
        "difficulty": "easy|medium|hard",
        "calories": number,
        "nutrition": {{"protein": number, "carbs": number, "fat": number, "fiber": number}},
        "tags": [str]
    }}
]

Only return the JSON array."""


class AIProvider(ABC):
    """Abstract base class for AI providers.

    Subclasses only implement ``_query``; prompts and response parsing are
    shared. Every method raises ``ExternalServiceError`` when the response
    cannot be used.
    """

    name = "ai"

    @abstractmethod
    async def _query(self, prompt: str, json_mode: bool = True) -> str:
        """Send a prompt and return the raw text of the reply."""

    async def _query_image(self, prompt: str, image: bytes, mime_type: str) -> str:
        """Send a prompt with an inline image. Only multimodal providers override this."""
        raise ExternalServiceError(f"{self.name} provider cannot analyze images")

    async def analyze_food(
        self,
        description: str,
        image: Optional[bytes] = None,
        mime_type: str = "image/jpeg",
    ) -> Dict[str, Any]:
        """Food description and/or photo to a structured nutrition breakdown."""
        if image is None:
            response = await self._query(FOOD_ANALYSIS_PROMPT.format(subject=f'this food: "{description}"'))
        else:
            subject = "the food in this image"
            if description:
                subject += f' (described as "{description}")'
            response = await self._query_image(FOOD_ANALYSIS_PROMPT.format(subject=subject), image, mime_type)
        return extract_json(response, "object")

    async def generate_meal_plan(
        self,
        diet_type: str,
        calories: float,
        meals: int,
        allergies: List[str],
        preferences: List[str],
    ) -> Dict[str, Any]:
        """Meal preferences to a structured multi-meal plan."""
        prompt = MEAL_PLAN_PROMPT.format(
            diet_type=diet_type,
            calories=round(calories),
            meals=meals,
            allergies=", ".join(allergies) if allergies else "none",
            preferences=", ".join(preferences) if preferences else "none",
        )
        response = await self._query(prompt)
        data = extract_json(response, "object")
        if not isinstance(data.get("meals"), list):
            raise ExternalServiceError("Meal plan response has no meals list")
        return data

    async def recommend_recipes(self, query: str, dietary_preferences: List[str]) -> List[Dict[str, Any]]:
        """Free-text query and diet tags to a list of structured recipes."""
        prompt = RECIPE_PROMPT.format(
            query=query,
            diets=", ".join(dietary_preferences) if dietary_preferences else "none",
        )
        response = await self._query(prompt, json_mode=False)
        return extract_json(response, "array")

    async def coach_reply(self, prompt: str) -> str:
        """Free-text coaching answer."""
        response = await self._query(prompt, json_mode=False)
        return (response or "").strip()


class OllamaProvider(AIProvider):
    """Ollama (local LLM) provider."""

    name = "ollama"

    def __init__(self, host: str, model: str, timeout: float = 60.0):
        self.host = host
        self.model = model
        self.timeout = timeout

    async def _query(self, prompt: str, json_mode: bool = True) -> str:
        """Query Ollama API."""
        payload = {"model": self.model, "prompt": prompt, "stream": False}
        if json_mode:
            payload["format"] = "json"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.host}/api/generate", json=payload)
                response.raise_for_status()
                return response.json()["response"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            raise ExternalServiceError(f"Ollama request failed: {e}") from e


class GroqProvider(AIProvider):
    """Groq cloud provider (free tier)."""

    name = "groq"

    def __init__(self, api_key: str, model: str, timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    async def _query(self, prompt: str, json_mode: bool = True) -> str:
        """Query Groq API."""
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    "https://api.groq.com/openai/v1/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
                response.raise_for_status()
                return response.json()["choices"][0]["message"]["content"]
        except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
            raise ExternalServiceError(f"Groq request failed: {e}") from e


class GeminiProvider(AIProvider):
    """Google Gemini provider (free tier)."""

    name = "gemini"

    def __init__(self, api_key: str, model: str):
        import google.generativeai as genai

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model)

    async def _query(self, prompt: str, json_mode: bool = True) -> str:
        """Query Gemini API."""
        config = {"response_mime_type": "application/json"} if json_mode else None
        try:
            response = await self.model.generate_content_async(prompt, generation_config=config)
            return response.text
        except Exception as e:
            raise ExternalServiceError(f"Gemini request failed: {e}") from e

    async def _query_image(self, prompt: str, image: bytes, mime_type: str) -> str:
        """Query Gemini with the image as an inline blob part."""
        try:
            response = await self.model.generate_content_async(
                [prompt, {"mime_type": mime_type, "data": image}],
                generation_config={"response_mime_type": "application/json"},
            )
            return response.text
        except Exception as e:
            raise ExternalServiceError(f"Gemini image request failed: {e}") from e


def build_provider(settings: Optional[Settings] = None) -> Optional[AIProvider]:
    """Provider for the configured backend, or None when only local rules should run."""
    settings = settings or get_settings()
    provider = settings.ai_provider

    if provider == "gemini" and settings.gemini_api_key:
        return GeminiProvider(settings.gemini_api_key, settings.gemini_model)
    if provider == "groq" and settings.groq_api_key:
        return GroqProvider(settings.groq_api_key, settings.groq_model, settings.ai_timeout_seconds)
    if provider == "ollama":
        return OllamaProvider(settings.ollama_host, settings.ollama_model, settings.ai_timeout_seconds)

    if provider != "rule_based":
        logger.warning("AI provider %s has no credentials, using rule-based fallbacks only", provider)
    return None
