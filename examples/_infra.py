from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from algebras import Result, TaskResult  # noqa: E402


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    age: int
    is_active: bool = True


def _empty_users() -> dict[int, User]:
    return {}


@dataclass(slots=True)
class FakeUserStore:
    name: str
    users: dict[int, User] = field(default_factory=_empty_users)
    delay_seconds: float = 0.0
    closed: bool = False

    def fetch_user(self, user_id: int) -> TaskResult[User]:
        async def run() -> Result[User]:
            await asyncio.sleep(self.delay_seconds)
            user = self.users.get(user_id)
            if user is None:
                return Result.fail(f"{self.name}: user {user_id} not found")
            return Result.ok(user)

        return TaskResult(run)

    async def aclose(self) -> None:
        self.closed = True


def sample_store() -> FakeUserStore:
    return FakeUserStore(
        name="store",
        users={
            1: User(1, "Ada", 36),
            2: User(2, "Kid", 12),
            3: User(3, "Ghost", 40, is_active=False),
        },
        delay_seconds=0.01,
    )


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:  # pragma: no cover (examples only)
    asyncio.run(main())
