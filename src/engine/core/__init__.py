"""
どこで: `engine.core` サブパッケージ。
何を: 幾何レコード・同次変換の適用・変換行列の検査・フィールド走査を提供。
なぜ: 変換の中核を分類ヒューリスティクスや公開 API から分離し、単体で検証可能にするため。
"""
