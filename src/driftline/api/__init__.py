# どこで: `src/driftline/api/__init__.py`。
# 何を: 公開 API パッケージのエントリポイントとして G/L/Export と、ユーザー定義登録用の primitive を再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from .export import Export
from .layers import L
from .primitives import G
from driftline.core.primitive_registry import primitive

__all__ = ["Export", "G", "L", "primitive"]
