from __future__ import annotations

from _infra import FakeUserStore, User, banner, run, sample_store

from algebras import DoScope, Option, Result, TaskResult, do, lift


def greeting(user: User) -> str:
    return f"hello, {user.name}"


def load_greeting(store: FakeUserStore, user_id: int) -> TaskResult[str]:
    # Chained style: every step short-circuits on the first failure.
    return (
        store.fetch_user(user_id)
        .ensure(lambda user: user.is_active, lambda: f"user {user_id} is inactive")
        .map(greeting)
    )


async def load_pair(scope: DoScope, store: FakeUserStore) -> str:
    # Do style: the same rules, written top to bottom.
    first = await scope.bind(store.fetch_user(1))
    second = await scope.bind(store.fetch_user(2))
    scope.ensure(second.age >= 18, f"{second.name} is underage")
    return await scope.return_(f"{first.name} & {second.name}")


async def main() -> None:
    banner("01_quickstart: Option + Result + TaskResult + Do")

    nickname = lift.to_option(None).or_else(lambda: Option.some("anonymous"))
    print(f"option: {nickname!r}")

    parsed = Result.catching(lambda: int("42")).map(lambda n: n * 2)
    print(f"result: {parsed!r}")

    store = sample_store()
    for user_id in (1, 3, 99):
        print(f"task result {user_id}: {await load_greeting(store, user_id)!r}")

    print(f"do: {await do.execute(lambda scope: load_pair(scope, store))!r}")


if __name__ == "__main__":
    run(main)
