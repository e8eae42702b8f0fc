# src/driftline/core/primitive_registry.py
# op 名から primitive の生成関数・引数メタ・既定値を引くレジストリ。

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from driftline.core.geometry import normalize_args
from driftline.core.param_meta import ParamMeta
from driftline.core.realized_geometry import RealizedGeometry

PrimitiveFunc = Callable[[tuple[tuple[str, Any], ...]], RealizedGeometry]


@dataclass(frozen=True, slots=True)
class PrimitiveSpec:
    """登録済み primitive 1 件分の情報。

    Attributes
    ----------
    func : PrimitiveFunc
        正規化済み args を受け取る生成関数。
    meta : dict[str, ParamMeta]
        引数名ごとの ParamMeta。空なら引数チェックを行わない。
    defaults : dict[str, Any]
        シグネチャ由来の既定値（meta に載っている引数のみ）。
    """

    func: PrimitiveFunc
    meta: dict[str, ParamMeta] = field(default_factory=dict)
    defaults: dict[str, Any] = field(default_factory=dict)


class PrimitiveRegistry:
    """op 名 → PrimitiveSpec の対応表。"""

    def __init__(self) -> None:
        self._specs: dict[str, PrimitiveSpec] = {}

    def _register(self, name: str, spec: PrimitiveSpec, *, overwrite: bool = True) -> None:
        """primitive を登録する（`@primitive` からのみ呼ぶ）。

        Raises
        ------
        ValueError
            overwrite=False で同名が登録済みの場合。
        """
        if not overwrite and name in self._specs:
            raise ValueError(f"primitive '{name}' は既に登録されている")
        self._specs[name] = spec

    def get(self, name: str) -> PrimitiveFunc:
        """op 名に対応する生成関数を返す。

        Raises
        ------
        KeyError
            未登録の op 名が指定された場合。
        """
        return self._specs[name].func

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __getitem__(self, name: str) -> PrimitiveFunc:
        return self.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._specs))

    def get_meta(self, name: str) -> dict[str, ParamMeta]:
        spec = self._specs.get(name)
        return {} if spec is None else dict(spec.meta)

    def get_defaults(self, name: str) -> dict[str, Any]:
        spec = self._specs.get(name)
        return {} if spec is None else dict(spec.defaults)


primitive_registry = PrimitiveRegistry()
"""グローバルな primitive レジストリインスタンス。"""


def _defaults_from_signature(
    f: Callable[..., RealizedGeometry],
    param_meta: dict[str, ParamMeta],
) -> dict[str, Any]:
    """meta に載った引数の既定値をシグネチャから集める。

    既定値は Geometry 引数として署名できる値でなければならない
    （`G.<name>()` の省略引数を埋めるのに使うため）。

    Raises
    ------
    ValueError
        引数がシグネチャに無い、既定値が無い/None、または署名できない値の場合。
    """
    sig = inspect.signature(f)
    defaults: dict[str, Any] = {}
    for arg in param_meta:
        param = sig.parameters.get(arg)
        if param is None:
            raise ValueError(
                f"primitive '{f.__name__}' の meta 引数がシグネチャに存在しない: {arg!r}"
            )
        if param.default is inspect.Parameter.empty or param.default is None:
            raise ValueError(
                f"primitive '{f.__name__}' の meta 引数は None 以外の default 必須: {arg!r}"
            )
        defaults[arg] = param.default
    try:
        normalize_args(defaults)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"primitive '{f.__name__}' の default が署名できない値を含む") from exc
    return defaults


def primitive(
    func: Callable[..., RealizedGeometry] | None = None,
    *,
    overwrite: bool = True,
    meta: dict[str, ParamMeta] | None = None,
):
    """関数名を op 名として primitive を登録するデコレータ。

    driftline 内の primitive は meta 必須。デコレートした関数自体はそのまま返す。

    Examples
    --------
    @primitive(meta={"radius": ParamMeta(kind="float", min=0.0)})
    def ring(*, radius=1.0, center=(0.0, 0.0)):
        ...
    """

    def decorator(
        f: Callable[..., RealizedGeometry],
    ) -> Callable[..., RealizedGeometry]:
        module = str(f.__module__)
        if meta is None and module.startswith("driftline."):
            raise ValueError(f"組み込み primitive は meta 必須: {module}.{f.__name__}")

        def wrapper(args: tuple[tuple[str, Any], ...]) -> RealizedGeometry:
            return f(**dict(args))

        spec = PrimitiveSpec(
            func=wrapper,
            meta=dict(meta or {}),
            defaults={} if meta is None else _defaults_from_signature(f, meta),
        )
        primitive_registry._register(f.__name__, spec, overwrite=overwrite)
        return f

    if func is None:
        return decorator
    return decorator(func)


__all__ = ["PrimitiveFunc", "PrimitiveRegistry", "PrimitiveSpec", "primitive", "primitive_registry"]
