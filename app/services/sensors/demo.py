"""
Demo mode data.

Lets the dashboard be explored without a GitHub account. Repositories are
grouped into archetypes by id range (startup 200-299, enterprise 300-399,
hobby 500+), and every "random" detail is drawn from a generator seeded by
repository id and timeframe so the same request always returns the same data.
"""

import random

from app.schemas.sensors import (
    AgeMarker,
    ChurnFile,
    CodebaseAgeResult,
    DailyActivity,
    Hero,
    PulseResult,
    PulseStatus,
    TimeSinkResult,
    TruckFactorResult,
)
from app.services.github.types import GitHubAccount, GitHubInstallation, GitHubRepo
from app.services.sensors.common import DAY_MS
from app.services.sensors.pulse import utc_day

DEMO_INSTALLATIONS: list[GitHubInstallation] = [
    GitHubInstallation(
        id=9001,
        account=GitHubAccount(
            login="demo-engineer",
            avatar_url="https://ui-avatars.com/api/?name=Demo+Engineer&background=0D8ABC&color=fff",
            type="User",
        ),
    ),
    GitHubInstallation(
        id=9002,
        account=GitHubAccount(
            login="startup-inc",
            avatar_url="https://ui-avatars.com/api/?name=Startup+Inc&background=random",
            type="Organization",
        ),
    ),
    GitHubInstallation(
        id=9003,
        account=GitHubAccount(
            login="enterprise-corp",
            avatar_url="https://ui-avatars.com/api/?name=Enterprise+Corp&background=333&color=fff",
            type="Organization",
        ),
    ),
    GitHubInstallation(
        id=9004,
        account=GitHubAccount(
            login="acme-solutions",
            avatar_url="https://ui-avatars.com/api/?name=Acme+Solutions&background=666&color=fff",
            type="Organization",
        ),
    ),
    GitHubInstallation(
        id=9005,
        account=GitHubAccount(
            login="hobby-collective",
            avatar_url="https://ui-avatars.com/api/?name=Hobby+Collective&background=f0f&color=fff",
            type="Organization",
        ),
    ),
]


def _repo(repo_id: int, full_name: str, private: bool, branch: str = "main") -> GitHubRepo:
    return GitHubRepo(
        id=repo_id,
        name=full_name.split("/", 1)[1],
        full_name=full_name,
        private=private,
        default_branch=branch,
    )


DEMO_REPOS: dict[int, list[GitHubRepo]] = {
    9001: [
        _repo(101, "demo-engineer/personal-portfolio", False),
        _repo(102, "demo-engineer/obsidian-plugin", False, "master"),
        _repo(103, "demo-engineer/dotfiles", False),
        _repo(104, "cool-startup/marketing-site", True, "production"),
        _repo(105, "cool-startup/backend-api", True),
        _repo(106, "open-source-co/react-components", False),
    ],
    9002: [
        _repo(201, "startup-inc/core-platform", True),
        _repo(202, "startup-inc/mobile-app", True, "develop"),
        _repo(203, "startup-inc/analytics-service", True),
        _repo(204, "startup-inc/auth-gateway", True),
    ],
    9003: [
        _repo(301, "enterprise-corp/legacy-billing", True, "trunk"),
        _repo(302, "enterprise-corp/frontend-monorepo", True),
        _repo(303, "enterprise-corp/data-warehouse", True),
        _repo(304, "enterprise-corp/internal-tools", True, "master"),
    ],
    9004: [
        _repo(401, "acme-solutions/widget-factory", False),
        _repo(402, "acme-solutions/compliance-checker", True),
        _repo(403, "acme-solutions/inventory-sync", True),
    ],
    9005: [
        _repo(501, "hobby-collective/recipe-manager", False),
        _repo(502, "hobby-collective/fitness-tracker", False),
        _repo(503, "hobby-collective/dnd-character-sheet", False),
    ],
}


def _is_startup(repo_id: int) -> bool:
    return 200 <= repo_id < 300


def _is_enterprise(repo_id: int) -> bool:
    return 300 <= repo_id < 400


def _is_hobby(repo_id: int) -> bool:
    return repo_id >= 500


def _rng(repo_id: int, timeframe_days: int, sensor: str) -> random.Random:
    return random.Random(f"{sensor}:{repo_id}:{timeframe_days}")


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def get_demo_installations() -> list[GitHubInstallation]:
    return DEMO_INSTALLATIONS


def get_demo_repos(installation_id: int) -> list[GitHubRepo]:
    return DEMO_REPOS.get(installation_id, [])


def demo_time_sink(repo_id: int, timeframe_days: int) -> TimeSinkResult:
    rng = _rng(repo_id, timeframe_days, "time_sink")

    modifier = 0
    if timeframe_days <= 7:
        modifier = -15 + (repo_id % 30)
    if timeframe_days >= 90:
        modifier = 20
    score = _clamp((repo_id * 17) % 100 + modifier)

    def every(days: int, extra: int = 0) -> int:
        return -(-timeframe_days // days) + extra

    if _is_enterprise(repo_id):
        churn = [
            ("Legacy/Billing/Core.cs", every(2, 5)),
            ("Legacy/Common/Utils.cs", every(4, 2)),
            ("Database/Procedures/UpdateBilling.sql", every(10, 3)),
            ("Global.asax", 1),
        ]
        score = min(95, score + 30)
    elif _is_startup(repo_id):
        churn = [
            ("src/api/v1/endpoints.ts", every(3, 4)),
            ("src/models/User.ts", every(5, 2)),
            ("package.json", every(14, 1)),
            ("kubernetes/deployment.yaml", 2),
        ]
        score = min(85, score + 10)
    elif _is_hobby(repo_id):
        churn = [("src/main.rs", every(20, 1)), ("README.md", 1)]
        score = max(5, score - 20)
    else:
        churn = [("src/index.ts", 3), ("src/utils.ts", 2)]

    jitter = 8 if timeframe_days <= 7 else 3
    previous = _clamp(score + rng.choice((jitter, -jitter)))
    total = max(1, timeframe_days * 3)

    return TimeSinkResult(
        score=score,
        previous_score=previous,
        total_touches=total,
        rework_touches=round(total * score / 100),
        churn_files=[ChurnFile(file=path, pr_count=count) for path, count in churn],
    )


def demo_truck_factor(repo_id: int, timeframe_days: int) -> TruckFactorResult:
    rng = _rng(repo_id, timeframe_days, "truck_factor")
    total_files = 100 + (repo_id % 500)

    if repo_id == 101 or _is_hobby(repo_id):
        risk = 100
        heroes = [Hero(author="dev-explorer", file_count=total_files, top_files=["src/main.ts", "README.md"])]
    elif _is_enterprise(repo_id):
        risk = 25
        heroes = [
            Hero(author="engineering-lead", file_count=15, top_files=["src/security/audit.ts"]),
            Hero(author="devops-guru", file_count=12, top_files=["infra/terraform/main.tf"]),
            Hero(author="backend-expert", file_count=10, top_files=["src/api/v1/auth.ts"]),
        ]
    elif _is_startup(repo_id):
        risk = 65
        heroes = [
            Hero(
                author="founding-engineer",
                file_count=45,
                top_files=["src/core/engine.ts", "src/auth/logic.ts"],
            ),
            Hero(author="early-hire", file_count=22, top_files=["src/api/routes.ts"]),
        ]
    else:
        risk = 40
        heroes = [
            Hero(author="maintainer-1", file_count=20, top_files=["src/utils.ts"]),
            Hero(author="maintainer-2", file_count=18, top_files=["src/lib.ts"]),
        ]

    return TruckFactorResult(
        risk_score=risk,
        previous_risk_score=_clamp(risk + rng.choice((5, -5))),
        heroes=heroes,
        total_files=total_files,
    )


def demo_pulse(repo_id: int, timeframe_days: int, now: int) -> PulseResult:
    rng = _rng(repo_id, timeframe_days, "pulse")
    status, score, previous = PulseStatus.CONSISTENT, 75, 70
    intensity, multiplier = 0.5, 5

    if _is_startup(repo_id):
        status, score = PulseStatus.HIGH_CADENCE, 90 + (repo_id % 10)
        previous, intensity, multiplier = score - 15, 0.85, 12
    elif _is_enterprise(repo_id):
        status, score = PulseStatus.CONSISTENT, 60 + (repo_id % 20)
        previous, intensity, multiplier = score, 0.6, 20
    elif repo_id == 102:
        status, score, previous = PulseStatus.STAGNANT, 5, 12
        intensity, multiplier = 0.02, 1
    elif _is_hobby(repo_id):
        status, score = PulseStatus.SPORADIC, 30 + (repo_id % 40)
        previous, intensity, multiplier = score + 5, 0.2, 3

    daily = []
    for i in range(timeframe_days - 1, -1, -1):
        count = rng.randint(1, multiplier) if rng.random() < intensity else 0
        daily.append(DailyActivity(date=utc_day(now - i * DAY_MS), count=count))

    return PulseResult(
        score=_clamp(score),
        previous_score=_clamp(previous),
        status=status,
        daily_activity=daily,
    )


def demo_codebase_age(repo_id: int) -> CodebaseAgeResult:
    if _is_enterprise(repo_id):
        return CodebaseAgeResult(
            year=2017,
            status="Maintenance Mode",
            points=[
                AgeMarker(marker="React 16.2", impact="-3 years", status="legacy"),
                AgeMarker(marker="Webpack 3", impact="-2 years", status="legacy"),
                AgeMarker(marker="Redux Saga", impact="-1 year", status="legacy"),
                AgeMarker(marker="High JS:TS Ratio", impact="-2 years", status="legacy"),
            ],
        )
    if _is_startup(repo_id):
        return CodebaseAgeResult(
            year=2024,
            status="Bleeding Edge",
            points=[
                AgeMarker(marker="React 18.3", impact="+2 years", status="modern"),
                AgeMarker(marker="Vite 5", impact="+2 years", status="modern"),
                AgeMarker(marker="TanStack Query", impact="+1 year", status="modern"),
                AgeMarker(marker="100% TypeScript", impact="+1 year", status="modern"),
            ],
        )
    return CodebaseAgeResult(
        year=2021,
        status="Stable / Mature",
        points=[
            AgeMarker(marker="React 17", impact="0 years", status="modern"),
            AgeMarker(marker="Webpack 5", impact="+1 year", status="modern"),
            AgeMarker(marker="TypeScript 4.x", impact="0 years", status="modern"),
            AgeMarker(marker="Standard React Hooks", impact="+1 year", status="modern"),
        ],
    )
