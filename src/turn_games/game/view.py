"""View protocol for state with a private and a public form.

公開情報と非公開情報を持つ状態のための共通インタフェース。

例: 自分の盤面の船の位置は本人だけが知っている（private）が、
相手から見えるのは撃たれたマスの結果だけ（public）。
行や盤面などの複合データは、要素ごとに同じ操作を適用して View を導出する。
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

V = TypeVar("V", bound="View")


@runtime_checkable
class View(Protocol):
    """Something that can be compared and rendered as ground truth or public view."""

    def equal_private(self, other: object) -> bool:
        """真の値（ground truth）が等しいか。"""
        ...

    def equal_public(self, other: object) -> bool:
        """公開ビューに射影したあとで等しいか。"""
        ...

    def render_private(self) -> str:
        ...

    def render_public(self) -> str:
        ...


def equal_private_all(items: Sequence[V], others: Sequence[V]) -> bool:
    """Element-wise private equality. Sequences of different length are unequal."""
    return len(items) == len(others) and all(
        a.equal_private(b) for a, b in zip(items, others)
    )


def equal_public_all(items: Sequence[V], others: Sequence[V]) -> bool:
    """Element-wise public equality. Sequences of different length are unequal."""
    return len(items) == len(others) and all(
        a.equal_public(b) for a, b in zip(items, others)
    )


def render_private_all(items: Sequence[View], sep: str = " ") -> str:
    return sep.join(item.render_private() for item in items)


def render_public_all(items: Sequence[View], sep: str = " ") -> str:
    return sep.join(item.render_public() for item in items)
