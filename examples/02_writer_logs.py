from __future__ import annotations

from _infra import FakeUserStore, User, banner, run, sample_store

from algebras import Result, Writer, WriterTaskResult


def fetch_user_w(store: FakeUserStore, user_id: int) -> WriterTaskResult[User, str]:
    """
    Fetch with a log line. The log survives only when the fetch succeeds.
    """
    return WriterTaskResult.from_task_result(store.fetch_user(user_id)).with_log(f"{store.name}:fetch_user({user_id})")


async def main() -> None:
    banner("02_writer_logs: Writer (value + log)")

    pure = Writer.of(2, "start").bind(lambda x: Writer.of(x * 21, "doubled"))
    print(pure.pretty())

    store = sample_store()
    flow = (
        fetch_user_w(store, 1)
        .map(lambda user: user.name)
        .with_log("mapped:name")
    )
    match await flow:
        case Result(is_success=True, value=(name, log)):
            print(f"ok: {name}")
            print(f"log: {list(log)!r}")
        case failed:
            print(f"error: {failed.error}")


if __name__ == "__main__":
    run(main)
