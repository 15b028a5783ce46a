"""iRail stations MCP server: station lookup tools over stdio."""

import json
import logging

from mcp.server import Server
from mcp.types import Tool, TextContent

from .exceptions import StationNotFound
from .stations import get_station_from_id, get_stations

logger = logging.getLogger(__name__)

# Create MCP server
app = Server("irail-stations")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="search_stations",
            description="Search railway stations by (partial) name, returning JSON-LD",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Station name or partial name (e.g., 'Brussel', 'Gent-Sint-Pieters'); empty lists all stations",
                        "default": "",
                    },
                    "country": {
                        "type": "string",
                        "description": "Country code to filter on (e.g., 'be', 'nl')",
                    },
                    "sorted": {
                        "type": "boolean",
                        "description": "If true, equally good matches are ordered by station traffic (default: false)",
                        "default": False,
                    },
                },
            },
        ),
        Tool(
            name="get_station",
            description="Get one station by identifier, returning JSON-LD",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {
                        "type": "string",
                        "description": "Station code, 'BE.NMBS.' id or URI (e.g., '008892007', 'BE.NMBS.008892007')",
                    },
                },
                "required": ["id"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "search_stations":
            result = _search_stations(arguments)
        elif name == "get_station":
            result = _get_station(arguments)
        else:
            result = f"Unknown tool: {name}"

        return [TextContent(type="text", text=result)]
    except Exception as e:
        error_msg = f"Error: {str(e)}"
        logger.error(error_msg, exc_info=True)
        return [TextContent(type="text", text=error_msg)]


def _search_stations(arguments: dict) -> str:
    """Search stations in the bundled catalog."""
    query = arguments.get("query") or ""
    country = arguments.get("country") or None
    sort_by_traffic = bool(arguments.get("sorted", False))

    document = get_stations(query, country=country, sorted=sort_by_traffic)
    return json.dumps(document, ensure_ascii=False, indent=2)


def _get_station(arguments: dict) -> str:
    """Resolve one station identifier."""
    identifier = arguments.get("id", "")

    if not identifier:
        return "Error: 'id' parameter is required"

    try:
        document = get_station_from_id(identifier)
    except StationNotFound as e:
        return f"Error: {e}"

    return json.dumps(document, ensure_ascii=False, indent=2)


async def main():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    logging.basicConfig(level=logging.INFO)

    async with stdio_server() as (read_stream, write_stream):
        init_options = app.create_initialization_options()
        await app.run(read_stream, write_stream, init_options)


def cli():
    """Entry point for console script."""
    import asyncio
    asyncio.run(main())


if __name__ == "__main__":
    cli()
