"""
Codebase Age: a heuristic "effective year" for a JavaScript/TypeScript stack.

Reads package.json and tsconfig.json from the default branch and moves a
base year forwards or backwards for each modernity signal:

- React major version (>= 18 modern, 17 neutral, older legacy)
- Native ES modules, or a bundler that hides CommonJS
- TypeScript strict mode, or TypeScript missing altogether

Analysis never raises to the caller: any failure yields an "Unknown" result.
"""

import asyncio
import json
import logging
import re
from typing import Any

import httpx

from app.schemas.sensors import AgeMarker, CodebaseAgeResult
from app.services.github import GitHubAPIError, GitHubService

logger = logging.getLogger(__name__)

BASE_YEAR = 2024
MAX_YEAR = BASE_YEAR + 1

MODERN_STACK = "Modern Stack"
LEGACY_STACK = "Legacy Stack"
UNKNOWN_STACK = "Unknown"

MANIFEST_PATH = "package.json"
TSCONFIG_PATH = "tsconfig.json"

_VERSION_OPERATORS = re.compile(r"[\^~>=<]")
_LEADING_INT = re.compile(r"^\s*(\d+)")
_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")


class _AgeTally:
    """Running year, modern flag and markers while the heuristics are applied."""

    def __init__(self) -> None:
        self.year = BASE_YEAR
        self.modern = True
        self.points: list[AgeMarker] = []

    def modern_signal(self, marker: str, impact: str, years: int) -> None:
        self.year += years
        self.points.append(AgeMarker(marker=marker, impact=impact, status="modern"))

    def legacy_signal(self, marker: str, impact: str, years: int) -> None:
        self.year -= years
        self.modern = False
        self.points.append(AgeMarker(marker=marker, impact=impact, status="legacy"))

    def neutral(self, marker: str, impact: str = "Unknown") -> None:
        self.points.append(AgeMarker(marker=marker, impact=impact, status="neutral"))

    def result(self) -> CodebaseAgeResult:
        return CodebaseAgeResult(
            year=min(self.year, MAX_YEAR),
            status=MODERN_STACK if self.modern else LEGACY_STACK,
            points=self.points,
        )


ALL_DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")


def _dependency_version(
    manifest: dict[str, Any],
    name: str,
    sections: tuple[str, ...] = ALL_DEPENDENCY_SECTIONS,
) -> str | None:
    for section in sections:
        deps = manifest.get(section)
        if isinstance(deps, dict) and deps.get(name):
            return str(deps[name])
    return None


def parse_major_version(version_range: str) -> int | None:
    """Major version from a semver range like "^18.2.0"; None for "latest", "*", etc."""
    match = _LEADING_INT.match(_VERSION_OPERATORS.sub("", version_range))
    return int(match.group(1)) if match else None


def strip_json_comments(text: str) -> str:
    """Remove // and /* */ comments, which tsconfig.json allows."""
    return _BLOCK_COMMENT.sub("", _LINE_COMMENT.sub("", text))


def _check_react(tally: _AgeTally, manifest: dict[str, Any]) -> None:
    version = _dependency_version(manifest, "react")
    if not version:
        return
    major = parse_major_version(version)
    if major is None:
        logger.debug(f"Ignoring unparsable React version {version!r}")
        return

    if major >= 18:
        tally.modern_signal(f"React {major}", "+2 years", 2)
    elif major == 17:
        tally.year -= 1
        tally.modern = False
        tally.neutral(f"React {major}", "Neutral")
    else:
        tally.legacy_signal(f"React {major}", "-2 years", 3)


def _is_bundled(manifest: dict[str, Any]) -> bool:
    """Vite counts as a build or runtime dependency; Next only as a runtime one."""
    return bool(
        _dependency_version(manifest, "vite", ("devDependencies", "dependencies"))
        or _dependency_version(manifest, "next", ("dependencies",))
    )


def _check_module_system(tally: _AgeTally, manifest: dict[str, Any]) -> None:
    if manifest.get("type") == "module":
        tally.modern_signal("ESM Native", "+1 year", 1)
    elif _is_bundled(manifest):
        tally.neutral("Bundled (Vite/Next)", "Neutral")
    else:
        tally.legacy_signal("CommonJS detected", "-2 years", 2)


def _check_typescript(tally: _AgeTally, tsconfig_text: str) -> None:
    try:
        tsconfig = json.loads(strip_json_comments(tsconfig_text))
    except ValueError:
        tsconfig = None

    if tsconfig is None:
        # Trailing commas and similar relaxed JSON, or a literal null
        if '"strict": true' in tsconfig_text:
            tally.modern_signal("Strict TypeScript", "+1 year", 1)
        else:
            tally.neutral("TS Config Parse Error")
        return

    # Any other non-object shape simply has no strict flag
    compiler_options = tsconfig.get("compilerOptions") if isinstance(tsconfig, dict) else None
    strict = isinstance(compiler_options, dict) and compiler_options.get("strict") is True

    if strict:
        tally.modern_signal("Strict TypeScript", "+1 year", 1)
    else:
        tally.legacy_signal("No Strict TS", "-1 year", 1)


def analyze_stack(package_json: str | None, tsconfig_json: str | None) -> CodebaseAgeResult:
    """
    Score already-fetched config files.

    Args:
        package_json: Raw package.json text, or None if the repo has none
        tsconfig_json: Raw tsconfig.json text, or None if the repo has none

    Returns:
        CodebaseAgeResult with the clamped year and the markers that moved it
    """
    tally = _AgeTally()

    if package_json is None:
        tally.neutral("No package.json")
    else:
        try:
            manifest = json.loads(package_json)
        except ValueError:
            logger.warning("Error parsing package.json", exc_info=True)
        else:
            if not isinstance(manifest, dict):
                tally.neutral("Invalid package.json")
            else:
                _check_react(tally, manifest)
                _check_module_system(tally, manifest)

    if tsconfig_json is not None:
        _check_typescript(tally, tsconfig_json)
    elif package_json is not None:
        tally.legacy_signal("No TypeScript", "-1 year", 1)

    return tally.result()


def analysis_failed() -> CodebaseAgeResult:
    return CodebaseAgeResult(
        year=BASE_YEAR,
        status=UNKNOWN_STACK,
        points=[AgeMarker(marker="Analysis Failed", impact="Unknown", status="neutral")],
    )


def placeholder_result(github_repo_id: int) -> CodebaseAgeResult:
    """Canned answer used when there is no token or repository name.

    Not an analysis: the choice only looks at whether the id contains a 7 or a 1.
    """
    digits = str(github_repo_id)
    if "7" in digits or "1" in digits:
        return CodebaseAgeResult(
            year=2019,
            status=LEGACY_STACK,
            points=[
                AgeMarker(marker="React < 17", impact="-2 years", status="legacy"),
                AgeMarker(marker="CommonJS detected", impact="-2 years", status="legacy"),
                AgeMarker(marker="No Strict TS", impact="-1 year", status="legacy"),
            ],
        )
    return CodebaseAgeResult(
        year=2023,
        status=MODERN_STACK,
        points=[
            AgeMarker(marker="React 18+", impact="+2 years", status="modern"),
            AgeMarker(marker="ESM Native", impact="+1 year", status="modern"),
            AgeMarker(marker="Strict TypeScript", impact="+1 year", status="modern"),
        ],
    )


async def _fetch_text(github: GitHubService, repo_name: str, path: str) -> str | None:
    """A file that cannot be fetched counts as absent."""
    try:
        repo_file = await github.get_file_content(repo_name, path)
    except (GitHubAPIError, httpx.HTTPError) as e:
        logger.info(f"Fetch failed for {repo_name}/{path}: {e}")
        return None
    return repo_file.content if repo_file else None


async def compute_codebase_age(
    github_repo_id: int,
    access_token: str | None,
    repo_name: str | None,
) -> CodebaseAgeResult:
    """
    Estimate the effective year of a repository's stack.

    Args:
        github_repo_id: GitHub repository id (only used by the placeholder)
        access_token: Caller's GitHub token
        repo_name: Repository in "owner/repo" form

    Returns:
        CodebaseAgeResult; never raises
    """
    if not access_token or not repo_name:
        return placeholder_result(github_repo_id)

    try:
        github = GitHubService(access_token)
        package_json, tsconfig_json = await asyncio.gather(
            _fetch_text(github, repo_name, MANIFEST_PATH),
            _fetch_text(github, repo_name, TSCONFIG_PATH),
        )
        return analyze_stack(package_json, tsconfig_json)
    except Exception:
        logger.exception(f"Codebase age analysis failed for {repo_name}")
        return analysis_failed()
