"""Tests for the prompt and resource catalogs."""

from __future__ import annotations

import pytest

from quiver_mcp.catalog import PROMPTS, RESOURCES, SERVER_INSTRUCTIONS, get_prompt, read_resource
from quiver_mcp.tools import build_tool_catalog
from quiver_mcp.utils.exceptions import ToolValidationError, UnknownIdentifierError


class TestPrompts:
    def test_prompt_names(self):
        assert [p.name for p in PROMPTS] == [
            "analyze-congress-trading",
            "company-deep-dive",
            "government-influence-analysis",
            "optimize-query-strategy",
        ]

    def test_messages_are_user_then_assistant(self):
        messages = get_prompt("company-deep-dive", {"ticker": "NVDA"})
        assert [m.role for m in messages] == ["user", "assistant"]
        assert "NVDA" in messages[0].content.text
        assert 'sections: ["basic", "trading"]' in messages[1].content.text

    def test_optional_arguments_may_be_omitted(self):
        messages = get_prompt("analyze-congress-trading")
        assert messages[0].content.text.startswith("I want to analyze congressional trading patterns.")
        assert "get_bulk_congress_trading" in messages[1].content.text

    def test_ticker_changes_the_workflow(self):
        messages = get_prompt("analyze-congress-trading", {"ticker": "MSFT"})
        assert 'get_historical_congress_trading` with ticker="MSFT"' in messages[1].content.text

    def test_sector_adds_query_filter(self):
        messages = get_prompt("government-influence-analysis", {"sector": "defense"})
        assert "in the defense sector" in messages[0].content.text
        assert 'query: "defense"' in messages[1].content.text

    def test_optimize_query_uses_catalog_fields(self):
        text = get_prompt("optimize-query-strategy", {"data_type": "lobbying"})[1].content.text
        assert "client_name, registrant_name, amount, date" in text

    def test_missing_required_argument(self):
        with pytest.raises(ToolValidationError, match="ticker"):
            get_prompt("company-deep-dive", {})

    def test_unknown_prompt(self):
        with pytest.raises(UnknownIdentifierError, match="Unknown prompt: nope"):
            get_prompt("nope")

    def test_mcp_prompt_arguments(self):
        prompt = PROMPTS[1].to_mcp_prompt()
        assert prompt.arguments[0].name == "ticker"
        assert prompt.arguments[0].required is True


class TestResources:
    def test_resource_uris(self):
        assert [r.uri for r in RESOURCES] == [
            "quiver://server/instructions",
            "quiver://docs/optimization-guide",
            "quiver://docs/field-reference",
            "quiver://examples/congress-analysis",
            "quiver://examples/company-research",
            "quiver://reference/response-modes",
        ]
        assert all(r.mime_type == "text/markdown" for r in RESOURCES)

    def test_every_resource_renders(self):
        for resource in RESOURCES:
            assert read_resource(resource.uri).startswith("# ")

    def test_instructions_resource(self):
        assert read_resource("quiver://server/instructions") == SERVER_INSTRUCTIONS

    def test_field_reference_is_generated_from_catalog(self):
        text = read_resource("quiver://docs/field-reference")
        for tool in build_tool_catalog():
            assert f"`{tool.name}`" in text
        assert "| `get_companies` | 100 | ticker, name, exchange, market_cap |" in text
        assert "| `get_recent_legislation` | none | all |" in text

    def test_unknown_resource(self):
        with pytest.raises(UnknownIdentifierError, match="Unknown resource"):
            read_resource("quiver://nothing/here")
