"""GitHub access through the gh CLI.

Every remote operation shells out to `gh`, which handles authentication.
These calls block, so the TUI only ever runs them from worker threads.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from dataclasses import dataclass
from typing import Any

from .log import get_logger
from .models import NotificationRecord, SubjectType

_log = get_logger("github")


class GatewayError(Exception):
    """A remote operation failed. Always recoverable."""


class EnvironmentCheckError(Exception):
    """The gh CLI can't be used. Fatal at startup."""


class CliNotInstalledError(EnvironmentCheckError):
    pass


class CliNotAuthenticatedError(EnvironmentCheckError):
    pass


@dataclass(frozen=True)
class OpenTarget:
    """What `gh ... --web` should open for a notification."""

    kind: str  # "issue", "pr" or "repo"
    repository: str
    number: str | None = None

    def argv(self, binary: str = "gh") -> list[str]:
        if self.kind == "repo" or self.number is None:
            return [binary, "repo", "view", self.repository, "--web"]
        return [binary, self.kind, "view", self.number, "-R", self.repository, "--web"]


def extract_number(url: str) -> str | None:
    """Return the trailing path segment of an API URL if it's numeric.

    https://api.github.com/repos/o/r/issues/42 -> "42"
    """
    segment = url.rstrip("/").rsplit("/", 1)[-1]
    if segment.isdigit():
        return segment
    return None


def resolve_open_target(record: NotificationRecord) -> OpenTarget:
    """Pick the page to open for a notification.

    Issues and pull requests open directly when the subject URL ends in a
    number. Everything else, including anything without a number, opens the
    repository page.
    """
    number = extract_number(record.url)
    if number is not None:
        if record.subject_type is SubjectType.ISSUE:
            return OpenTarget("issue", record.repository, number)
        if record.subject_type is SubjectType.PULL_REQUEST:
            return OpenTarget("pr", record.repository, number)
    return OpenTarget("repo", record.repository)


def parse_pages(output: str) -> list[dict[str, Any]]:
    """Parse `gh api --paginate` output into one flat list.

    gh writes each page's JSON array back to back ("[...][...]"), so decode
    values one at a time and concatenate them in order.
    """
    decoder = json.JSONDecoder()
    items: list[dict[str, Any]] = []
    pos = 0
    end = len(output)
    while True:
        while pos < end and output[pos].isspace():
            pos += 1
        if pos >= end:
            break
        page, pos = decoder.raw_decode(output, pos)
        if isinstance(page, list):
            items.extend(page)
        else:
            items.append(page)
    return items


def check_cli(binary: str = "gh") -> None:
    """Make sure gh is installed and logged in.

    Raises CliNotInstalledError or CliNotAuthenticatedError.
    """
    if shutil.which(binary) is None:
        raise CliNotInstalledError("GitHub CLI (gh) is not installed")

    try:
        subprocess.run([binary, "auth", "status"], capture_output=True, check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        raise CliNotAuthenticatedError("not authenticated with GitHub. Run: gh auth login") from e


def _describe(e: Exception) -> str:
    if isinstance(e, subprocess.CalledProcessError):
        stderr = e.stderr.strip() if isinstance(e.stderr, str) else ""
        return stderr or f"exit status {e.returncode}"
    return str(e)


class GhGateway:
    """Fetch, mark-read and open operations backed by the gh CLI."""

    def __init__(
        self, binary: str = "gh", api_version: str = "2022-11-28", include_read: bool = False
    ) -> None:
        self.binary = binary
        self.api_version = api_version
        self.include_read = include_read

    def _run(self, args: list[str]) -> str:
        # gh always writes UTF-8, whatever the locale says
        argv = [self.binary, *args]
        _log.debug("run: %s", " ".join(argv))
        result = subprocess.run(
            argv, capture_output=True, encoding="utf-8", errors="replace", check=True
        )
        return result.stdout

    def fetch_notifications(self) -> list[NotificationRecord]:
        endpoint = "notifications?all=true" if self.include_read else "notifications"
        try:
            output = self._run(["api", endpoint, "--paginate"])
        except (subprocess.CalledProcessError, OSError, ValueError) as e:
            raise GatewayError(f"failed to fetch notifications: {_describe(e)}") from e

        try:
            payloads = parse_pages(output)
            records = [NotificationRecord.from_api(p) for p in payloads]
        except (ValueError, AttributeError) as e:
            raise GatewayError(f"failed to parse notifications: {e}") from e

        _log.info("fetched %d notifications", len(records))
        return records

    def mark_read(self, thread_id: str) -> None:
        try:
            self._run(
                [
                    "api",
                    "--method",
                    "PATCH",
                    "-H",
                    "Accept: application/vnd.github+json",
                    "-H",
                    f"X-GitHub-Api-Version: {self.api_version}",
                    f"/notifications/threads/{thread_id}",
                ]
            )
        except (subprocess.CalledProcessError, OSError, ValueError) as e:
            raise GatewayError(f"failed to mark as read: {_describe(e)}") from e
        _log.info("mark_read: %s", thread_id)

    def open_external(self, record: NotificationRecord) -> None:
        target = resolve_open_target(record)
        argv = target.argv(self.binary)
        _log.debug("open: %s", " ".join(argv))
        try:
            subprocess.run(
                argv, capture_output=True, encoding="utf-8", errors="replace", check=True
            )
        except (subprocess.CalledProcessError, OSError, ValueError) as e:
            raise GatewayError(f"failed to open in browser: {_describe(e)}") from e
        _log.info("open: %s %s %s", target.kind, target.repository, target.number or "")
