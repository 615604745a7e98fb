"""
どこで: `engine.core` サブパッケージ。
何を: 4x4 変換行列ユーティリティとカメラ値型を提供。
なぜ: ピッキング層/セッション層が共通の行列規約で計算できるようにするため。
"""
