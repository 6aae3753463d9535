"""
Summarization prompt templates.

Defines the map, reduce and report prompts used by the stuff and map-reduce
summarizers. Each prompt resolves from the Langfuse registry first and falls
back to the local template.

Template slots:
- map: {context} (one chunk)
- reduce: {docs} (a group of summaries)
- report: {context} (all documents or collapsed summaries), {format_instructions}

Dependencies: langchain_core.prompts, standup_digest.observability.prompt_registry
System role: Prompt templates for the summarization engine
"""

import logging

from langchain_core.prompts import BasePromptTemplate, ChatPromptTemplate, PromptTemplate

from standup_digest.configs import get_settings
from standup_digest.configs.model import ModelSettings
from standup_digest.observability.prompt_registry.models import ModelConfig
from standup_digest.observability.prompt_registry.registry import get_prompt_registry

logger = logging.getLogger(__name__)

MAP_PROMPT_NAME = "standup-summary-map"
REDUCE_PROMPT_NAME = "standup-summary-reduce"
REPORT_PROMPT_NAME = "standup-summary-report"

MAP_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "You condense engineering activity logs without losing facts."),
    ("human", """The following is a slice of project activity: Slack standup updates and/or GitHub issues, as JSON.

{context}

Write a concise summary of this slice. Keep every concrete fact: who worked on what, issue and PR numbers, states (open, closed, in review), dates, risks and blockers. Do not speculate."""),
])

REDUCE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "You merge partial project summaries into one."),
    ("human", """The following are partial summaries of the same project's activity:

{docs}

Merge them into a single consolidated summary. Remove duplicates, keep every distinct fact, issue reference, owner, risk and blocker."""),
])

REPORT_FORMAT = """{{
    "summary": "Narrative of the project's current state, key accomplishments and focus areas, in 3-4 paragraphs separated by \\n\\n.",
    "riskBlockerActionNeeded": "Risks, blockers and actions needing attention separated by \\n. State 'No explicit blockers reported.' when there are none.",
    "taskDetails": {{
        "completed": "Main Issue Title: brief description\\n\\t completed item\\n\\t completed item",
        "inProgress": "Main Issue Title: brief description\\n\\t ongoing item\\n\\t ongoing item",
        "inReview": "Main Issue Title: brief description\\n\\t item under review. State 'Nothing is in review.' when there is nothing."
    }}
}}"""

REPORT_TEMPLATE = """You are a project manager writing a weekly project status report.

Use ONLY the information in the context below. It contains Slack standup updates and GitHub issues, or summaries of them.

Context:
{context}

Return a single JSON object with exactly this shape:
""" + REPORT_FORMAT + """

Rules:
- Use double quotes for all keys and string values and escape inner quotes.
- Use \\n for new lines and \\t for tabs inside strings.
- Include PR numbers, issue references and dates when they are mentioned.

{format_instructions}"""

REPORT_PROMPT = PromptTemplate.from_template(REPORT_TEMPLATE)

_LOCAL_PROMPTS: dict[str, BasePromptTemplate] = {
    MAP_PROMPT_NAME: MAP_PROMPT,
    REDUCE_PROMPT_NAME: REDUCE_PROMPT,
    REPORT_PROMPT_NAME: REPORT_PROMPT,
}


def register_summary_prompts(
    model_settings: ModelSettings | None = None,
    labels: list[str] | None = None,
) -> None:
    """
    Push the map, reduce and report prompts to Langfuse as new versions.

    Args:
        model_settings: Model the prompts are tuned for (defaults to the configured model)
        labels: Labels for the new versions (defaults to ["development"])
    """
    registry = get_prompt_registry()
    if not registry.is_enabled:
        logger.debug("Prompt registry disabled, skipping registration")
        return

    config = ModelConfig.from_model_settings(model_settings or get_settings().llm)
    for name, template in _LOCAL_PROMPTS.items():
        registry.register(name, template, config, labels=labels or ["development"])
    logger.info("Registered summarization prompts: %s", ", ".join(_LOCAL_PROMPTS))


def _resolve(name: str, use_registry: bool, label: str | None) -> BasePromptTemplate:
    if not use_registry:
        return _LOCAL_PROMPTS[name]
    return get_prompt_registry().resolve(name, _LOCAL_PROMPTS[name], label=label)


def get_map_prompt(use_registry: bool = False, label: str | None = None) -> BasePromptTemplate:
    """Prompt summarizing a single chunk ({context})."""
    return _resolve(MAP_PROMPT_NAME, use_registry, label)


def get_reduce_prompt(use_registry: bool = False, label: str | None = None) -> BasePromptTemplate:
    """Prompt merging a group of summaries ({docs})."""
    return _resolve(REDUCE_PROMPT_NAME, use_registry, label)


def get_report_prompt(use_registry: bool = False, label: str | None = None) -> BasePromptTemplate:
    """Prompt producing the structured report ({context}, {format_instructions})."""
    return _resolve(REPORT_PROMPT_NAME, use_registry, label)
