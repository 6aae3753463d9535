"""Tests for the summarization prompts."""

from unittest.mock import MagicMock, patch

from langchain_core.prompts import PromptTemplate

from standup_digest.configs.model import ModelSettings
from standup_digest.core.summarization.prompts import (
    MAP_PROMPT_NAME,
    REDUCE_PROMPT_NAME,
    REPORT_PROMPT_NAME,
    get_map_prompt,
    get_reduce_prompt,
    get_report_prompt,
    register_summary_prompts,
)
from standup_digest.core.summarization.report_schema import get_format_instructions
from standup_digest.observability.prompt_registry.registry import PromptRegistry

REGISTRY_TARGET = "standup_digest.core.summarization.prompts.get_prompt_registry"


class TestLocalPrompts:
    """Tests for the local templates."""

    def test_input_variables(self) -> None:
        """Each prompt declares exactly its slots."""
        assert set(get_map_prompt().input_variables) == {"context"}
        assert set(get_reduce_prompt().input_variables) == {"docs"}
        assert set(get_report_prompt().input_variables) == {"context", "format_instructions"}

    def test_report_prompt_renders_json_example(self) -> None:
        """Literal braces of the JSON example survive formatting."""
        text = get_report_prompt().format(
            context="standups", format_instructions=get_format_instructions()
        )
        assert '"riskBlockerActionNeeded"' in text
        assert "standups" in text

    def test_registry_not_consulted_when_disabled(self) -> None:
        with patch(REGISTRY_TARGET) as get_registry:
            get_map_prompt(use_registry=False)
        get_registry.assert_not_called()


class TestRegistryPrompts:
    """Tests for registry resolution and registration."""

    @patch(REGISTRY_TARGET)
    def test_resolution_delegates_to_registry(self, get_registry) -> None:
        remote = PromptTemplate.from_template("remote {context}")
        get_registry.return_value.resolve.return_value = remote

        prompt = get_map_prompt(use_registry=True, label="production")

        assert prompt is remote
        get_registry.return_value.resolve.assert_called_once_with(
            MAP_PROMPT_NAME, get_map_prompt(), label="production"
        )

    def test_inactive_registry_falls_back(self) -> None:
        with patch(REGISTRY_TARGET, return_value=PromptRegistry()):
            assert get_report_prompt(use_registry=True) is get_report_prompt()

    @patch(REGISTRY_TARGET)
    def test_register_all_prompts(self, get_registry) -> None:
        """Registration pushes map, reduce and report prompts with the model config."""
        registry = MagicMock(is_enabled=True)
        get_registry.return_value = registry

        register_summary_prompts(
            ModelSettings(provider="openai", name="gpt-4o-mini", temperature=0.7),
            labels=["staging"],
        )

        calls = registry.register.call_args_list
        assert [c.args[0] for c in calls] == [MAP_PROMPT_NAME, REDUCE_PROMPT_NAME, REPORT_PROMPT_NAME]
        assert calls[0].args[2].model == "gpt-4o-mini"
        assert calls[0].kwargs["labels"] == ["staging"]

    @patch(REGISTRY_TARGET)
    def test_register_skipped_when_disabled(self, get_registry) -> None:
        registry = MagicMock(is_enabled=False)
        get_registry.return_value = registry

        register_summary_prompts(ModelSettings())

        registry.register.assert_not_called()
