#!/usr/bin/env python3
"""
AgentChat CLI - Main Entry Point

Usage:
    agentchat rules '["Be polite", "Answer in English"]'
    agentchat rules --system "Never share secrets"
    agentchat request GET /api/agents --token TOKEN
    agentchat request POST /api/agents --data '{"name": "Tutor"}'
"""

import argparse
import asyncio
import json
import sys
from typing import Dict, List, Optional

from rich.console import Console

from agentchat.core.config import settings
from agentchat.core.exceptions import ApiError, ConfigurationError
from agentchat.core.logging_config import generate_request_id, set_request_id
from agentchat.services.api_manager import ApiManager
from agentchat.services.behavior_rules_transformation import (
    BehaviorRulesTransformationService,
    RulesFormat,
    RulesTransformOptions,
)
from agentchat.services.token_provider import TokenProvider
from agentchat.utils.behavior_rules import (
    AGENT_RULES_HEADER,
    SYSTEM_RULES_HEADER,
    BehaviorRulesUtil,
)
from agentchat.utils.error_messages import extract_error_message


HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="agentchat",
        description="AgentChat - behavior rules and backend API tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  agentchat rules '{"rules": ["Be polite"]}'        Render stored rules
  agentchat rules --system "Never share secrets"     Render as system rules
  agentchat request GET /api/user/me -t TOKEN        Call the backend
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="Parse and format a stored behavior rules value")
    rules_parser.add_argument("value", help="Rules as JSON, a JSON list, or plain text")
    header_group = rules_parser.add_mutually_exclusive_group()
    header_group.add_argument(
        "--system",
        action="store_true",
        help="Prefix with the system behavior rules header"
    )
    header_group.add_argument(
        "--agent",
        action="store_true",
        help="Prefix with the agent behavior rules header"
    )
    rules_parser.add_argument(
        "--format",
        dest="rules_format",
        choices=[f.value for f in RulesFormat],
        default=RulesFormat.NUMBERED.value,
        help="List style (default: numbered)"
    )

    # Request command
    request_parser = subparsers.add_parser("request", help="Send one authenticated request to the backend")
    request_parser.add_argument("method", type=str.upper, choices=HTTP_METHODS, help="HTTP method")
    request_parser.add_argument("endpoint", help="Endpoint path, e.g. /api/agents")
    request_parser.add_argument("--data", "-d", help="JSON request body")
    request_parser.add_argument(
        "--param", "-p",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter (repeatable)"
    )
    request_parser.add_argument("--token", "-t", help="Bearer token")
    request_parser.add_argument(
        "--server-url",
        default=settings.API_BASE_URL,
        help=f"Backend base URL (default: {settings.API_BASE_URL})"
    )

    return parser


def parse_params(pairs: List[str]) -> Dict[str, str]:
    """Turn KEY=VALUE arguments into a params dict"""
    params = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid parameter '{pair}', expected KEY=VALUE")
        key, value = pair.split("=", 1)
        params[key] = value
    return params


def render_rules(value: str, header: Optional[str], rules_format: str) -> str:
    """Parse a stored rules value and render it as message content"""
    rules = BehaviorRulesUtil.parse(value)

    if rules_format == RulesFormat.NUMBERED.value:
        if header == SYSTEM_RULES_HEADER:
            return BehaviorRulesUtil.format_system_rules(rules)
        if header == AGENT_RULES_HEADER:
            return BehaviorRulesUtil.format_agent_rules(rules)
        return BehaviorRulesUtil.format(rules)

    options = RulesTransformOptions(header=header, format=RulesFormat(rules_format))
    return BehaviorRulesTransformationService().transform_rules_to_message(rules, options)


async def send_request(
    method: str,
    endpoint: str,
    server_url: str,
    token: Optional[str] = None,
    data: Optional[str] = None,
    params: Optional[Dict[str, str]] = None,
):
    """Issue a single request through ApiManager"""
    body = json.loads(data) if data else None

    async with ApiManager(base_url=server_url, token_provider=TokenProvider(token=token)) as api:
        if method in ("GET", "DELETE"):
            return await getattr(api, method.lower())(endpoint, params=params)
        return await getattr(api, method.lower())(endpoint, data=body, params=params)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    console = Console()

    if args.command == "rules":
        header = SYSTEM_RULES_HEADER if args.system else AGENT_RULES_HEADER if args.agent else None
        output = render_rules(args.value, header, args.rules_format)
        if output:
            console.print(output, markup=False, highlight=False)
        else:
            console.print("[dim]No behavior rules[/dim]")
        return 0

    if args.command == "request":
        set_request_id(generate_request_id())
        try:
            params = parse_params(args.param)
            result = asyncio.run(send_request(
                args.method,
                args.endpoint,
                args.server_url,
                token=args.token,
                data=args.data,
                params=params,
            ))
        except ValueError as e:
            console.print(f"[red]✗ Invalid input:[/red] {e}")
            return 2
        except ConfigurationError as e:
            console.print(f"[red]✗ Configuration error:[/red] {e.message}")
            return 2
        except ApiError as e:
            status = f" ({e.status})" if e.status is not None else ""
            message = extract_error_message(e, "Request failed")
            console.print(f"[red]✗ Request failed{status}:[/red] {message}")
            return 1

        if isinstance(result, str):
            console.print(result, markup=False, highlight=False)
        else:
            console.print_json(data=result)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
