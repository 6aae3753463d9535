"""
LangChain to Langfuse prompt converter.

Converts LangChain templates to Langfuse prompt bodies. LangChain f-string
templates write variables as {var} and literal braces as {{ / }}; Langfuse
writes variables as {{var}} and literal braces as-is.

Dependencies: langchain_core.prompts
System role: Template format conversion for prompt registry
"""

import re
from typing import TypedDict

from langchain_core.prompts import ChatPromptTemplate, PromptTemplate
from langchain_core.prompts.chat import (
    AIMessagePromptTemplate,
    HumanMessagePromptTemplate,
    SystemMessagePromptTemplate,
)

_TOKEN_PATTERN = re.compile(r"\{\{|\}\}|\{([A-Za-z_][A-Za-z0-9_]*)\}")

_ROLE_BY_TEMPLATE = (
    (SystemMessagePromptTemplate, "system"),
    (HumanMessagePromptTemplate, "user"),
    (AIMessagePromptTemplate, "assistant"),
)


class LangfuseMessage(TypedDict):
    """Langfuse chat message format."""

    role: str
    content: str


def _convert_variables(content: str) -> str:
    """
    Convert LangChain f-string syntax to Langfuse syntax.

    {var} becomes {{var}}; escaped literals {{ and }} become { and }.

    Args:
        content: Template string in LangChain f-string syntax

    Returns:
        str: Template string in Langfuse syntax
    """

    def _replace(match: re.Match) -> str:
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        return "{{" + match.group(1) + "}}"

    return _TOKEN_PATTERN.sub(_replace, content)


def _get_role_from_message(message: object) -> str:
    """
    Extract role from LangChain message template.

    Raises:
        ValueError: If message type is unsupported
    """
    for template_cls, role in _ROLE_BY_TEMPLATE:
        if isinstance(message, template_cls):
            return role

    if isinstance(message, tuple) and len(message) == 2:
        role_map = {"system": "system", "human": "user", "user": "user", "ai": "assistant"}
        role = str(message[0]).lower()
        return role_map.get(role, role)

    raise ValueError(f"Unsupported message type: {type(message)}")


def _get_content_from_message(message: object) -> str:
    """Extract content template from LangChain message."""
    if hasattr(message, "prompt") and hasattr(message.prompt, "template"):
        return str(message.prompt.template)

    if isinstance(message, tuple) and len(message) == 2:
        return str(message[1])

    raise ValueError(f"Cannot extract content from: {type(message)}")


def convert_chat_template(template: ChatPromptTemplate) -> list[LangfuseMessage]:
    """
    Convert LangChain ChatPromptTemplate to Langfuse message format.

    Args:
        template: LangChain ChatPromptTemplate instance

    Returns:
        list[LangfuseMessage]: List of Langfuse-formatted messages

    Raises:
        ValueError: If template contains unsupported message types

    Example:
        >>> template = ChatPromptTemplate.from_messages([
        ...     ("system", "You summarize standups."),
        ...     ("human", "{context}"),
        ... ])
        >>> convert_chat_template(template)[1]
        {'role': 'user', 'content': '{{context}}'}
    """
    return [
        LangfuseMessage(
            role=_get_role_from_message(msg),
            content=_convert_variables(_get_content_from_message(msg)),
        )
        for msg in template.messages
    ]


def convert_text_template(template: PromptTemplate) -> str:
    """
    Convert LangChain PromptTemplate to Langfuse text format.

    Example:
        >>> convert_text_template(PromptTemplate.from_template('{{"a": 1}} {context}'))
        '{"a": 1} {{context}}'
    """
    return _convert_variables(template.template)
