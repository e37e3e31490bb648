"""Helpers for reading values from a human.

人間の入力を扱うユーティリティ。
- 文字列から整数列を取り出す（括弧・カンマは区切り文字として扱う）
- 正しい値が入力されるまで聞き直す
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Output = Callable[[str], None]

TRY_AGAIN = "Try again: "

_SEPARATORS = re.compile(r"[\s(),]+")


def parse_ints(raw: str) -> list[int] | None:
    """Split ``raw`` into integers.

    "(3, 0, 0, 1, 0)" や "3 0 0 1 0" → [3, 0, 0, 1, 0]
    整数でないトークンがあれば None。
    """
    tokens = [t for t in _SEPARATORS.split(raw) if t]
    try:
        return [int(t) for t in tokens]
    except ValueError:
        return None


def ask(
    prompt: Prompt,
    output: Output,
    query: str,
    parse: Callable[[str], T],
    requery: str = TRY_AGAIN,
) -> T:
    """Prompt until ``parse`` accepts the answer.

    parse は不正な入力に対して ValueError を送出すること。
    そのメッセージを表示してから requery で聞き直す。
    """
    raw = prompt(query)
    while True:
        try:
            return parse(raw)
        except ValueError as e:
            logger.info("Rejected input %r: %s", raw, e)
            output(str(e))
            raw = prompt(requery)
