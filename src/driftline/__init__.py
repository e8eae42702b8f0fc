# どこで: `src/driftline/__init__.py`。
# 何を: ルート `driftline` パッケージを定義する。
# なぜ: import 起点を `driftline` に統一するため。

from __future__ import annotations

from driftline.api import Export, G, L, primitive

__version__ = "0.1.0"

__all__ = ["Export", "G", "L", "primitive"]
