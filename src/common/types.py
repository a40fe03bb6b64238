"""
どこで: `common` の型定義。
何を: ベクトル/点の軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置し、core/render 双方から循環なく参照するため。
"""

Vec = tuple[float, ...]
Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
Vec4 = tuple[float, float, float, float]


__all__ = ["Vec", "Vec2", "Vec3", "Vec4"]
