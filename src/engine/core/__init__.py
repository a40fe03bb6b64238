"""
どこで: `engine.core` サブパッケージ。
何を: ベクトル/行列代数・角度・形状記述・永続パス構築器（Vec/Mat/Angle/Shape/Path3D）を提供。
なぜ: 描画ツリーの解釈器（`engine.render`）が依存する純粋な値と演算を、描画手段から分離するため。
"""
