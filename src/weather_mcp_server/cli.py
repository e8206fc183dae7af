"""One-shot command-line client for the weather tools.

Useful for inspecting the catalog or exercising a tool without running a
transport loop.
"""

from __future__ import annotations

import argparse
import json

import anyio

from weather_mcp.protocol import decode_response
from weather_mcp_server.config import ServerSettings, build_provider, build_server


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(description="Query the weather MCP tools.")
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--catalog",
        action="store_true",
        help="Print the tools/list result as JSON.",
    )
    action.add_argument(
        "--request",
        metavar="JSON",
        help="Dispatch one raw JSON-RPC request and print the response.",
    )
    action.add_argument(
        "--call",
        metavar="TOOL",
        help="Call a tool by name and print its text output.",
    )
    parser.add_argument(
        "--arguments",
        metavar="JSON",
        default="{}",
        help="Tool arguments as a JSON object (with --call).",
    )
    return parser


def _tool_call_request(name: str, arguments: str) -> str:
    return json.dumps(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "tools/call",
            "params": {"name": name, "arguments": json.loads(arguments)},
        }
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    server = build_server(build_provider(ServerSettings.from_env()))

    if args.request is not None:
        print(anyio.run(server.handle_raw, args.request))
        return 0

    if args.call is not None:
        try:
            raw = _tool_call_request(args.call, args.arguments)
        except json.JSONDecodeError as error:
            parser.error(f"--arguments is not valid JSON: {error}")
        response = decode_response(anyio.run(server.handle_raw, raw))
        if response.error is not None:
            print(f"error {response.error.code}: {response.error.message}")
            return 1
        result = response.result or {}
        for block in result.get("content", []):
            print(block["text"])
        return 1 if result.get("isError") else 0

    method = "tools/list" if args.catalog else "initialize"
    raw = json.dumps({"jsonrpc": "2.0", "id": 1, "method": method})
    response = decode_response(anyio.run(server.handle_raw, raw))
    print(json.dumps(response.result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
