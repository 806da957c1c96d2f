"""Command-line interface for webview_automation.

Talks to a running automation service (health, exec, screenshot) or opens
a pywebview window with the service attached (open).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="webview-automation",
        description="Drive an embedded web view over HTTP",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/webview-automation.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Base URL of the automation service (overrides client.base_url)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("health", help="Query the service health probe")

    exec_parser = subparsers.add_parser("exec", help="Execute a bridge command in the page")
    exec_parser.add_argument("name", type=str, help="Command name (e.g., click, navigate)")
    exec_parser.add_argument(
        "--args", type=str, default="{}",
        help='Command arguments as a JSON object (e.g., \'{"selector": "#go"}\')',
    )

    shot_parser = subparsers.add_parser("screenshot", help="Save a screenshot of the page")
    shot_parser.add_argument(
        "-o", "--output", type=Path, default=Path("screenshot.png"),
        help="Output PNG file (default: screenshot.png)",
    )

    open_parser = subparsers.add_parser(
        "open", help="Open a URL in a pywebview window with the automation service attached",
    )
    open_parser.add_argument("target", type=str, help="URL to load")
    open_parser.add_argument("--title", type=str, default="webview-automation")
    open_parser.add_argument("--width", type=int, default=1280)
    open_parser.add_argument("--height", type=int, default=800)

    return parser.parse_args(argv)


async def _health(base_url: str, timeout: float) -> None:
    from webview_automation.client import AutomationClient

    async with AutomationClient(base_url, timeout=timeout) as client:
        print(json.dumps(await client.health(), indent=2))


async def _exec(base_url: str, timeout: float, name: str, raw_args: str) -> None:
    from webview_automation.client import AutomationClient

    args = json.loads(raw_args)
    if not isinstance(args, dict):
        raise ValueError("--args must be a JSON object")
    async with AutomationClient(base_url, timeout=timeout) as client:
        print(json.dumps(await client.execute(name, **args), indent=2))


async def _screenshot(base_url: str, timeout: float, output: Path) -> None:
    from webview_automation.client import AutomationClient

    async with AutomationClient(base_url, timeout=timeout) as client:
        path = await client.save_screenshot(output)
    print(f"Saved screenshot to {path} ({path.stat().st_size} bytes)")


def _open(settings, args) -> None:
    """Open a window and serve automation for it until the window closes."""
    import webview

    from webview_automation.host.pywebview_host import PyWebviewHost
    from webview_automation.server.buffer import CommandOutcomes, ScreenshotBuffer
    from webview_automation.server.runner import start_automation

    buffer = ScreenshotBuffer()
    outcomes = CommandOutcomes()
    host = PyWebviewHost(buffer, outcomes)
    host.create_window(
        settings.server.surface,
        args.title,
        url=args.target,
        width=args.width,
        height=args.height,
    )
    server = start_automation(host, settings, buffer=buffer, outcomes=outcomes)
    try:
        webview.start()
    finally:
        server.stop()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the webview-automation CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from webview_automation.client import AutomationClientError
    from webview_automation.config.settings import load_settings
    from webview_automation.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    base_url = args.url or settings.client.base_url
    timeout = settings.client.timeout
    # The screenshot endpoint alone waits out the capture grace period
    shot_timeout = settings.server.screenshot_grace + timeout

    try:
        if args.command == "health":
            asyncio.run(_health(base_url, timeout))

        elif args.command == "exec":
            asyncio.run(_exec(base_url, timeout, args.name, args.args))

        elif args.command == "screenshot":
            asyncio.run(_screenshot(base_url, shot_timeout, args.output))

        elif args.command == "open":
            logger.info("Opening %s", args.target)
            _open(settings, args)

    except (AutomationClientError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
