"""
幾何レコード型

fields : 順序付き dict[str, Any]   # フィールド名 -> 値（挿入順を保持）

フィールド名の扱い（固定表 `FIELD_POLICIES`）:
- pos / pnt / o : 回転＋平行移動を適用（位置。`o` は球の中心）
- ori / nrm     : 回転のみ適用（方向ベクトルは位置と共に移動しない）
- fid / bnd     : 要素ごとに再帰（フィデューシャル、境界メッシュ）
- それ以外      : そのまま引き継ぐ（label, tri, r, unit など）

API 方針:
- レコードは不変。変更は `with_fields()` で新インスタンスを返す
- `Mapping` として振る舞うため、分類器は dict と同じように参照できる
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping


class FieldPolicy(Enum):
    TRANSLATE_ROTATE = "translate_rotate"
    ROTATE_ONLY = "rotate_only"
    RECURSE = "recurse"
    PASS_THROUGH = "pass_through"


FIELD_POLICIES: Mapping[str, FieldPolicy] = MappingProxyType(
    {
        "pos": FieldPolicy.TRANSLATE_ROTATE,
        "pnt": FieldPolicy.TRANSLATE_ROTATE,
        "o": FieldPolicy.TRANSLATE_ROTATE,
        "ori": FieldPolicy.ROTATE_ONLY,
        "nrm": FieldPolicy.ROTATE_ONLY,
        "fid": FieldPolicy.RECURSE,
        "bnd": FieldPolicy.RECURSE,
    }
)


def policy_of(name: str) -> FieldPolicy:
    """フィールド名に対応するポリシーを返す（未登録は PASS_THROUGH）。"""
    return FIELD_POLICIES.get(name, FieldPolicy.PASS_THROUGH)


@dataclass(frozen=True, slots=True, eq=False)
class GeometricRecord(Mapping[str, Any]):
    _fields: dict[str, Any] = field(default_factory=dict, repr=False)

    # ── ファクトリ ───────────────────
    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GeometricRecord":
        """任意の Mapping から浅いコピーでレコードを作る。

        入れ子の子レコード（fid/bnd の要素）は与えられた型のまま保持する。
        """
        if isinstance(mapping, GeometricRecord):
            return mapping
        if not isinstance(mapping, Mapping):
            raise TypeError(f"GeometricRecord には Mapping が必要です: got {type(mapping)!r}")
        for key in mapping:
            if not isinstance(key, str):
                raise TypeError(f"フィールド名は str である必要があります: {key!r}")
        return cls(dict(mapping))

    # ── Mapping プロトコル ───────────
    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def fields(self) -> Mapping[str, Any]:
        """読み取り専用ビュー。"""
        return MappingProxyType(self._fields)

    # ── ポリシー別ビュー ─────────────
    def _select(self, policy: FieldPolicy) -> dict[str, Any]:
        return {k: v for k, v in self._fields.items() if policy_of(k) is policy}

    def positions(self) -> dict[str, Any]:
        return self._select(FieldPolicy.TRANSLATE_ROTATE)

    def orientations(self) -> dict[str, Any]:
        return self._select(FieldPolicy.ROTATE_ONLY)

    def children(self) -> dict[str, Any]:
        return self._select(FieldPolicy.RECURSE)

    def extras(self) -> dict[str, Any]:
        """どのポリシーにも該当しない（引き継ぎのみの）フィールド。"""
        return self._select(FieldPolicy.PASS_THROUGH)

    # ── 純粋な更新 ───────────────────
    def with_fields(self, updates: Mapping[str, Any]) -> "GeometricRecord":
        """`updates` で値を差し替えた新しいレコード（キー順は元の順、新規キーは末尾）。"""
        merged = dict(self._fields)
        merged.update(updates)
        return GeometricRecord(merged)

    def to_dict(self) -> dict[str, Any]:
        """入れ子の `GeometricRecord` も含めて素の dict に戻す。"""
        out: dict[str, Any] = {}
        for name, value in self._fields.items():
            if policy_of(name) is FieldPolicy.RECURSE:
                out[name] = _children_to_plain(value)
            else:
                out[name] = value
        return out

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        names = ", ".join(self._fields)
        return f"GeometricRecord({names})"


def _children_to_plain(value: Any) -> Any:
    if isinstance(value, GeometricRecord):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return type(value)(_children_to_plain(v) for v in value)
    return value


__all__ = ["FieldPolicy", "FIELD_POLICIES", "policy_of", "GeometricRecord"]
