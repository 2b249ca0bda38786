#!/usr/bin/env python3
"""
Rift Relay - Overlay Data Relay

Usage:
    python scripts/run_relay.py --live-interval-ms 500 --lcu-interval-ms 1000

Watches the League Client for champion select and the running game for live
stats, and prints every overlay update.

Optional environment variables (or .env):
    LIVE_POLL_INTERVAL_MS, LIVE_REQUEST_TIMEOUT_MS, LIVE_CLIENT_URL
    LCU_POLL_INTERVAL_MS, LOG_LEVEL, LOG_FILE, APP_ENV
"""

import sys
import signal
import asyncio
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

# Load environment before imports that use config
load_dotenv()

from rift_relay.config import get_config, validate_config
from rift_relay.exceptions import RiftRelayError
from rift_relay.lcu import ClientSession
from rift_relay.live import LiveGamePoller
from rift_relay.logging_config import setup_logging, get_logger
from rift_relay.state import OverlayState

console = Console()
logger = get_logger(__name__)

CHANNEL_STYLES = {
    "lcuStatus": "cyan",
    "champSelect": "magenta",
    "gamePhase": "bold yellow",
    "gameStart": "bold green",
    "gameEvent": "yellow",
    "gameEnd": "bold red",
}


def print_broadcast(channel: str, payload: dict) -> None:
    if channel == "gameData":
        # Too noisy to print whole; summarize
        blue = payload["blue_team"]
        red = payload["red_team"]
        gold = payload["gold_history"][-1]["diff"] if payload["gold_history"] else 0
        console.print(
            f"[dim]{payload['game_time']:7.1f}s[/dim] "
            f"[blue]{blue['total_kills']}[/blue] - [red]{red['total_kills']}[/red] "
            f"gold diff {gold:+d}"
        )
        return

    style = CHANNEL_STYLES.get(channel, "white")
    if channel == "gameEvent":
        console.print(f"[{style}]{payload['type']}[/{style}] at {payload['time']:.0f}s {payload.get('killer') or ''}")
    elif channel == "champSelect":
        console.print(
            f"[{style}]Champ select[/{style}] {payload['phase']}: "
            f"{len(payload['bans'])} bans, {len(payload['picks'])} picks"
        )
    else:
        console.print(f"[{style}]{channel}[/{style}] {payload}")


async def run(live_interval_ms: int, lcu_interval_ms: int) -> None:
    config = get_config()

    live_poller = LiveGamePoller(
        poll_interval_ms=live_interval_ms,
        request_timeout_ms=config.live.request_timeout_ms,
        base_url=config.live.base_url,
    )
    client_session = ClientSession(poll_interval_ms=lcu_interval_ms)

    state = OverlayState()
    state.broadcast.connect(print_broadcast)
    state.attach(live_poller, client_session)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still raises KeyboardInterrupt
            pass

    client_session.start()
    live_poller.start()
    logger.info("Relay running")

    try:
        await stop_event.wait()
    finally:
        live_poller.stop()
        client_session.stop()
        # Let cancelled tasks run their cleanup
        await asyncio.sleep(0)
        logger.info("Relay stopped")


def main():
    parser = argparse.ArgumentParser(
        description="Rift Relay - League of Legends overlay data relay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/run_relay.py
    python scripts/run_relay.py --live-interval-ms 250 --log-level DEBUG
        """
    )

    parser.add_argument(
        "--live-interval-ms",
        type=int,
        default=None,
        help="Live game poll interval in ms (default: LIVE_POLL_INTERVAL_MS or 500)"
    )

    parser.add_argument(
        "--lcu-interval-ms",
        type=int,
        default=None,
        help="League Client polling fallback interval in ms (default: LCU_POLL_INTERVAL_MS or 1000)"
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL)"
    )

    args = parser.parse_args()

    try:
        validate_config()
    except RiftRelayError as e:
        console.print(f"[red]Configuration error: {e.message}[/red]")
        sys.exit(1)

    config = get_config()
    setup_logging(
        level=args.log_level or config.logging.level,
        json_format=config.logging.json_format,
        log_file=config.logging.log_file,
    )

    live_interval = args.live_interval_ms or config.live.poll_interval_ms
    lcu_interval = args.lcu_interval_ms or config.lcu.poll_interval_ms
    if live_interval <= 0 or lcu_interval <= 0:
        console.print("[red]Poll intervals must be positive[/red]")
        sys.exit(1)

    console.print(Panel.fit(
        f"[bold]Rift Relay[/bold]\n"
        f"Live game poll: {live_interval}ms\n"
        f"League Client poll fallback: {lcu_interval}ms",
        border_style="blue"
    ))

    try:
        asyncio.run(run(live_interval, lcu_interval))
    except KeyboardInterrupt:
        pass
    console.print("\n[dim]Relay stopped.[/dim]")


if __name__ == "__main__":
    main()
