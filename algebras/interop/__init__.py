"""
Interop
=======

Мосты к внешним системам: kungfu, каналы, HTTP, БД.
Транспорты не реализуются, только протоколы и обёртки в TaskResult.
"""

from .kungfu_bridge import (
    from_kungfu,
    from_lazy_coro_result,
    to_kungfu,
    to_lazy_coro_result,
    try_to_kungfu,
)
from .channel import WritableSink, complete_result, write_reader, write_result
from .http import HttpClient, HttpResponse, get_json_result, post_json_result, request_reader, send_result
from .db import (
    DbAction,
    DbConnection,
    DbTransaction,
    DbTransactionState,
    IsolationLevel,
    commit_transaction,
    rollback_transaction,
    to_state_task_result,
)

__all__ = (
    # kungfu
    "to_kungfu",
    "from_kungfu",
    "try_to_kungfu",
    "to_lazy_coro_result",
    "from_lazy_coro_result",
    # channel
    "WritableSink",
    "write_result",
    "complete_result",
    "write_reader",
    # http
    "HttpClient",
    "HttpResponse",
    "send_result",
    "get_json_result",
    "post_json_result",
    "request_reader",
    # db
    "IsolationLevel",
    "DbConnection",
    "DbTransaction",
    "DbTransactionState",
    "DbAction",
    "to_state_task_result",
    "commit_transaction",
    "rollback_transaction",
)
