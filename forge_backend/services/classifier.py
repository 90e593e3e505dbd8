"""
Prompt Classifier - keyword based intent matching
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models.generation import AppPlan, RequestType
from .templates import (
    GENERIC_FEATURES,
    GENERIC_PLAN_NOUN,
    GENERIC_PLAN_TITLE,
    GENERIC_RESPONSE,
    Intent,
    find_intent,
)

# Words that make the client treat a prompt as a build turn
CODE_KEYWORDS = (
    "create", "build", "make", "generate", "develop", "write", "code", "app", "application",
    "website", "web", "function", "component", "class", "module", "script", "program",
    "todo", "calculator", "game", "dashboard", "form", "login", "signup", "api", "database",
    "add", "implement", "design", "setup", "configure",
)


@dataclass
class Classification:
    """Outcome of classifying one prompt"""

    response: str
    intent: Intent | None = None
    bundle: dict[str, dict[str, str]] | None = None
    plan: AppPlan | None = None
    show_build_button: bool | None = None


def build_plan(intent: Intent | None) -> AppPlan:
    """Plan outline for an intent, or the generic one"""
    if intent is None:
        return AppPlan(
            title=GENERIC_PLAN_TITLE,
            description=f"Build a {GENERIC_PLAN_NOUN} application",
            features=list(GENERIC_FEATURES),
        )
    return AppPlan(
        title=intent.title,
        description=f"Build a {intent.noun} application",
        features=list(intent.features),
    )


def classify(prompt: str, request_type: RequestType | str = RequestType.CHAT) -> Classification:
    """Classify a prompt; never raises, an unmatched prompt gets the generic reply"""
    request_type = RequestType(request_type)
    intent = find_intent(prompt)

    if intent is None:
        result = Classification(response=GENERIC_RESPONSE)
    elif request_type == RequestType.BUILD:
        result = Classification(response=intent.built, intent=intent, bundle=intent.bundle())
    else:
        result = Classification(response=intent.intro, intent=intent)

    if request_type == RequestType.PLAN:
        result.plan = build_plan(intent)
        result.show_build_button = True

    return result


def is_code_generation_request(text: str) -> bool:
    """Whether a chat prompt should go through the build flow"""
    lowered = text.lower().strip()
    return any(keyword in lowered for keyword in CODE_KEYWORDS)
