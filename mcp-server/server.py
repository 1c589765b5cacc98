#!/usr/bin/env python3
"""MCP Server for the Compensation Calculator.

This server exposes total compensation calculations and the salary,
benefit and contribution limit reference data as MCP tools, allowing AI
assistants to answer questions about job offers.
"""

import os
import sys
import json
import asyncio
import logging
from typing import Any

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from tools import MultiOfferTools

logger = logging.getLogger(__name__)

# Create the MCP server
server = Server("compensation-calculator")

# Global tools instance (initialized on startup)
tools: MultiOfferTools | None = None


def get_tools() -> MultiOfferTools:
    """Get or initialize the tools instance."""
    global tools
    if tools is None:
        # Default offer can be set via COMPENSATION_CALCULATOR_OFFER env var
        default_offer = os.environ.get('COMPENSATION_CALCULATOR_OFFER')
        base_path = os.path.join(os.path.dirname(__file__), '..')
        tools = MultiOfferTools(base_path, default_offer)
    return tools


# Common offer parameter schema
OFFER_PARAM = {
    "type": "string",
    "description": "The offer name (folder in input-parameters). If not specified, uses the default offer. Use list_offers to see available offers."
}

OFFER_SPEC_SCHEMA = {
    "type": "object",
    "description": "Offer in the offer.json format. Every section is optional.",
    "properties": {
        "cashCompensation": {"type": "number", "description": "Annual base salary"},
        "equity": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "numberOfShares": {"type": "number"},
                "strikePrice": {"type": "number"},
                "fairMarketValue": {"type": "number"}
            }
        },
        "retirementMatch": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "mode": {"type": "string", "enum": ["percentage", "fixed-amount"]},
                "value": {"type": "number", "description": "Percent of salary (5 = 5%) or annual amount"}
            }
        },
        "benefits": {
            "type": "object",
            "description": "Map of benefit id to {enabled, amount}. Use list_benefits for the ids."
        },
        "customBenefits": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"name": {"type": "string"}, "amount": {"type": "number"}}
            }
        },
        "occupation": {
            "type": "object",
            "properties": {"id": {"type": "string"}, "customTitle": {"type": "string"}}
        },
        "location": {
            "type": "object",
            "properties": {"metroArea": {"type": "string"}, "region": {"type": "string"}}
        },
        "limitsYear": {"type": "integer"}
    }
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available compensation tools."""
    return [
        Tool(
            name="list_offers",
            description="List all saved offers with their cash salary and total compensation.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="reload_offers",
            description="Reload all offers from disk. Use this after adding, modifying, or removing offer.json files to refresh the cache without restarting the server.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="get_offer_summary",
            description="Get the total compensation breakdown for an offer: cash, equity, 401(k) match, benefits, composition percentages and contribution limit warnings.",
            inputSchema={
                "type": "object",
                "properties": {
                    "offer": OFFER_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_market_comparison",
            description="Compare an offer's cash salary to the market average for its occupation and location, including the cost-of-living adjustment when a metro area is selected.",
            inputSchema={
                "type": "object",
                "properties": {
                    "offer": OFFER_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="compare_offers",
            description="Compare two saved offers component by component and report which pays more in total.",
            inputSchema={
                "type": "object",
                "properties": {
                    "offer1": {"type": "string", "description": "First offer name"},
                    "offer2": {"type": "string", "description": "Second offer name"}
                },
                "required": ["offer1", "offer2"]
            }
        ),
        Tool(
            name="calculate_compensation",
            description="Calculate total compensation for an offer given inline, without saving it.",
            inputSchema={
                "type": "object",
                "properties": {
                    "offer_spec": OFFER_SPEC_SCHEMA
                },
                "required": ["offer_spec"]
            }
        ),
        Tool(
            name="list_occupations",
            description="List occupations with their average salary for each region.",
            inputSchema={
                "type": "object",
                "properties": {
                    "category": {"type": "string", "description": "Only list occupations in this category"}
                },
                "required": []
            }
        ),
        Tool(
            name="list_metro_areas",
            description="List metro areas with their region, cost-of-living index and salary multiplier.",
            inputSchema={
                "type": "object",
                "properties": {
                    "region": {"type": "string", "description": "Only list metro areas in this region"}
                },
                "required": []
            }
        ),
        Tool(
            name="list_regions",
            description="List the regions used for salary benchmarks.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="list_benefits",
            description="List the employer-paid benefit types with default amounts and estimation guidance.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="get_contribution_limits",
            description="Get the IRS HSA, FSA and 401(k) contribution limits for a year.",
            inputSchema={
                "type": "object",
                "properties": {
                    "year": {"type": "integer", "description": "Limits year. Defaults to the most recent year."}
                },
                "required": []
            }
        ),
        Tool(
            name="resolve_market_salary",
            description="Get the market salary for an occupation. A metro area takes precedence over a region; with neither the national average is used.",
            inputSchema={
                "type": "object",
                "properties": {
                    "occupation": {"type": "string", "description": "Occupation id"},
                    "metro_area": {"type": "string", "description": "Metro area id"},
                    "region": {"type": "string", "description": "Region id"}
                },
                "required": ["occupation"]
            }
        )
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        cc_tools = get_tools()
        offer = arguments.get("offer")

        if name == "list_offers":
            result = cc_tools.list_offers()
        elif name == "reload_offers":
            result = cc_tools.reload_offers()
        elif name == "get_offer_summary":
            result = cc_tools.get_offer_summary(offer)
        elif name == "get_market_comparison":
            result = cc_tools.get_market_comparison(offer)
        elif name == "compare_offers":
            result = cc_tools.compare_offers(arguments["offer1"], arguments["offer2"])
        elif name == "calculate_compensation":
            result = cc_tools.calculate_compensation(arguments["offer_spec"])
        elif name == "list_occupations":
            result = cc_tools.list_occupations(arguments.get("category"))
        elif name == "list_metro_areas":
            result = cc_tools.list_metro_areas(arguments.get("region"))
        elif name == "list_regions":
            result = cc_tools.list_regions()
        elif name == "list_benefits":
            result = cc_tools.list_benefits()
        elif name == "get_contribution_limits":
            result = cc_tools.get_contribution_limits(arguments.get("year"))
        elif name == "resolve_market_salary":
            result = cc_tools.resolve_market_salary(
                arguments["occupation"],
                arguments.get("metro_area"),
                arguments.get("region")
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, default=str)
        )]
    except Exception as e:
        logger.exception("Tool '%s' failed", name)
        return [TextContent(
            type="text",
            text=json.dumps({"error": str(e)}, indent=2)
        )]


async def main():
    """Run the MCP server."""
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
