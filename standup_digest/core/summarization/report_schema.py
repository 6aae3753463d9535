"""
Structured project-status report schema.

The report shape is pinned per deployment and versioned explicitly; prompt
revisions that rename fields must bump REPORT_SCHEMA_VERSION.

Dependencies: pydantic, langchain_core.output_parsers
System role: Final output contract of the summarization engine
"""

import logging

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import JsonOutputParser
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from standup_digest.core.exceptions import ReportParseError

logger = logging.getLogger(__name__)

REPORT_SCHEMA_VERSION = "v2"


class TaskDetails(BaseModel):
    """Task breakdown by delivery stage."""

    model_config = ConfigDict(populate_by_name=True)

    completed: str = Field(description="Completed work grouped under main issue titles")
    in_progress: str = Field(
        alias="inProgress",
        description="Ongoing work grouped under main issue titles",
    )
    in_review: str = Field(
        alias="inReview",
        description="Work under review; 'Nothing is in review.' when empty",
    )


class ProjectSummary(BaseModel):
    """Structured report produced once per successful run."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str = Field(description="Narrative summary of the project's current state")
    risk_blocker_action_needed: str = Field(
        alias="riskBlockerActionNeeded",
        description="Risks, blockers and actions needing attention",
    )
    task_details: TaskDetails = Field(
        alias="taskDetails",
        description="Completed / in-progress / in-review breakdown",
    )


def get_report_parser() -> JsonOutputParser:
    """JSON parser bound to the report schema (used for format instructions)."""
    return JsonOutputParser(pydantic_object=ProjectSummary)


def get_format_instructions() -> str:
    """Format instructions injected into the stuff and final prompts."""
    return get_report_parser().get_format_instructions()


def parse_report(raw_output: str, stage: str = "final") -> ProjectSummary:
    """
    Parse raw model output into a ProjectSummary.

    Accepts bare JSON or JSON wrapped in a markdown code fence.

    Args:
        raw_output: Model text output
        stage: Pipeline stage, recorded in the error context

    Returns:
        ProjectSummary: Validated report

    Raises:
        ReportParseError: If the output is not JSON or does not match the shape
    """
    try:
        payload = get_report_parser().parse(raw_output)
    except OutputParserException as e:
        logger.error("%s:parse_report - invalid JSON at stage=%s: %s", __name__, stage, e)
        raise ReportParseError(
            "Failed to generate final summary: output is not valid JSON",
            raw_output=raw_output,
            details={"stage": stage},
        ) from e

    if not isinstance(payload, dict):
        raise ReportParseError(
            "Failed to generate final summary: expected a JSON object",
            raw_output=raw_output,
            details={"stage": stage},
        )

    try:
        return ProjectSummary.model_validate(payload)
    except PydanticValidationError as e:
        logger.error(
            "%s:parse_report - schema mismatch at stage=%s: %d errors",
            __name__, stage, e.error_count(),
        )
        raise ReportParseError(
            "Failed to generate final summary: output does not match report shape",
            raw_output=raw_output,
            details={"stage": stage, "errors": e.errors(include_url=False)},
        ) from e
