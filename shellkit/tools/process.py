"""Signal running processes whose command line matches a regex."""

from __future__ import annotations

import os
import re
import signal

import psutil
from loguru import logger

NEVER_MATCHES = "$^"


def parse_signal(sig: str | int) -> signal.Signals:
    """Accept ``15``, ``"15"``, ``"TERM"`` or ``"SIGTERM"``.

    Raises ``ValueError`` for anything else.
    """
    text = str(sig).strip()
    if text.isdigit():
        return signal.Signals(int(text))
    name = text.upper()
    if not name.startswith("SIG"):
        name = f"SIG{name}"
    try:
        return signal.Signals[name]
    except KeyError:
        raise ValueError(f"unknown signal: {sig!r}") from None


def _command_line(proc: psutil.Process) -> str:
    cmdline = proc.info.get("cmdline")
    if cmdline:
        return " ".join(cmdline)
    return proc.info.get("name") or ""


def matching_processes(pattern: str, exclude: str = NEVER_MATCHES) -> list[tuple[int, str]]:
    """(pid, command line) of processes matching ``pattern`` and not ``exclude``.

    The calling process is never included.
    """
    match_re = re.compile(pattern)
    exclude_re = re.compile(exclude)
    me = os.getpid()

    matches: list[tuple[int, str]] = []
    for proc in psutil.process_iter(["pid", "name", "cmdline"]):
        pid = proc.info["pid"]
        if pid == me:
            continue
        command = _command_line(proc)
        if match_re.search(command) and not exclude_re.search(command):
            matches.append((pid, command))
    return matches


def signal_processes(pattern: str, sig: str | int = "15", exclude: str = NEVER_MATCHES) -> list[int]:
    """Send ``sig`` to every matching process.  Returns the signaled pids.

    Processes that exit or deny access before being signaled are skipped.
    """
    signum = parse_signal(sig)
    signaled: list[int] = []
    for pid, command in matching_processes(pattern, exclude):
        try:
            psutil.Process(pid).send_signal(signum)
        except (psutil.NoSuchProcess, psutil.AccessDenied) as exc:
            logger.debug("Skipping pid {} ({}): {}", pid, command, exc.__class__.__name__)
            continue
        logger.info("Sent {} to pid {} ({})", signum.name, pid, command)
        signaled.append(pid)
    return signaled
