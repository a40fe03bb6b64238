"""
どこで: `engine.render` サブパッケージ。
何を: 描画ツリー `Drawing` とその解釈器、描画面の境界（Renderer Protocol）と実装を提供。
なぜ: 純粋な値（core）と描画面への副作用を分離し、コマンドの発行順序を一箇所で管理するため。
"""
