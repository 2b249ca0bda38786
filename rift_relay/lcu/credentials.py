"""
League Client credential discovery.

The client process is launched with --app-port and --remoting-auth-token on
its command line; the same values are also written to a `lockfile`
(name:pid:port:password:protocol) in the install directory. The command line
is tried first, then the lockfile next to the executable or up to five parent
directories above it.
"""

import asyncio
import os
from typing import Optional

import psutil

from ..exceptions import ClientDiscoveryError
from ..logging_config import get_logger
from .models import LCUCredentials

logger = get_logger(__name__)

CLIENT_PROCESS_NAMES = {"LeagueClientUx.exe", "LeagueClientUx", "LeagueClient.exe", "LeagueClient"}
LOCKFILE_NAME = "lockfile"


def parse_lockfile(content: str) -> LCUCredentials:
    """
    Parse lockfile content.

    Raises:
        ValueError: If the content does not have five colon-separated fields
    """
    parts = content.strip().split(":")
    if len(parts) < 5:
        raise ValueError(f"expected 5 fields, got {len(parts)}")

    return LCUCredentials(
        pid=int(parts[1]),
        port=int(parts[2]),
        password=parts[3],
        protocol=parts[4] or "https",
    )


def parse_command_line(args: list[str], pid: Optional[int] = None) -> Optional[LCUCredentials]:
    """Extract port and auth token from client process arguments, if present."""
    port: Optional[int] = None
    token: Optional[str] = None

    for arg in args:
        if arg.startswith("--app-port="):
            try:
                port = int(arg.split("=", 1)[1])
            except ValueError:
                return None
        elif arg.startswith("--remoting-auth-token="):
            token = arg.split("=", 1)[1]

    if port is None or not token:
        return None
    return LCUCredentials(port=port, password=token, pid=pid)


def _find_client_process() -> Optional[psutil.Process]:
    for proc in psutil.process_iter(["name"]):
        try:
            if proc.info["name"] in CLIENT_PROCESS_NAMES:
                return proc
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return None


def _find_lockfile(exe_path: str) -> Optional[str]:
    current = os.path.dirname(exe_path)
    for _ in range(6):
        candidate = os.path.join(current, LOCKFILE_NAME)
        if os.path.exists(candidate):
            return candidate
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def read_lockfile(path: str) -> LCUCredentials:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_lockfile(f.read())
    except (OSError, ValueError) as e:
        raise ClientDiscoveryError.lockfile_unreadable(path, str(e))


def discover_credentials() -> LCUCredentials:
    """
    Find credentials for the running League Client.

    Raises:
        ClientDiscoveryError: If no client is running or its credentials
            cannot be read
    """
    proc = _find_client_process()
    if proc is None:
        raise ClientDiscoveryError.client_not_running()

    try:
        credentials = parse_command_line(proc.cmdline(), pid=proc.pid)
    except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
        logger.debug(f"Cannot read client command line: {e}")
        credentials = None

    if credentials is not None:
        return credentials

    try:
        exe_path = proc.exe()
    except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
        raise ClientDiscoveryError.missing_arguments(proc.pid) from e

    lockfile = _find_lockfile(exe_path)
    if lockfile is None:
        raise ClientDiscoveryError.missing_arguments(proc.pid)

    return read_lockfile(lockfile)


async def authenticate() -> LCUCredentials:
    """Default authenticator for ClientSession: one discovery attempt, off the loop."""
    return await asyncio.to_thread(discover_credentials)
