"""Prompt templates for the downstream article rating consumer."""

from __future__ import annotations

from .models import ArticleContent

PREVIEW_CHARS = 200
NOT_AVAILABLE = "N/A"

EVALUATION_AXES: dict[str, str] = {
    "practicalValue": """\
実用性評価 (1-10点):
この記事の内容が実際の業務や開発において、どの程度活用できるかを評価してください。

評価基準:
- 9-10点: 即座に適用可能、具体的な実装例あり
- 7-8点: 少し工夫すれば適用可能、参考になる
- 5-6点: 理論的には参考になるが、適用に工夫が必要
- 3-4点: 教養として有用だが、直接的な適用は困難
- 1-2点: 実用性に乏しい、理論的な内容のみ

考慮ポイント:
- 具体例やコードサンプルの有無
- 実装手順の明確さ
- 現実的な使用場面の想定
""",
    "technicalDepth": """\
技術深度評価 (1-10点):
この記事の技術的な内容の深さと専門性を評価してください。

評価基準:
- 9-10点: 高度な専門知識、詳細な技術解説
- 7-8点: 中級者向け、適度な技術詳細
- 5-6点: 基本的な技術内容、概要レベル
- 3-4点: 入門レベル、表面的な説明
- 1-2点: 技術的内容が薄い、一般論のみ

考慮ポイント:
- 技術的詳細の豊富さ
- 専門用語の適切な使用
- 背景理論の説明
- 実装の複雑さ
""",
    "understanding": """\
理解度評価 (1-10点):
あなたにとってこの記事がどの程度理解しやすいかを評価してください。

評価基準:
- 9-10点: 非常に分かりやすい、スムーズに理解
- 7-8点: 理解しやすい、多少の推測が必要
- 5-6点: 普通の理解しやすさ、部分的に難しい
- 3-4点: やや理解困難、専門知識が必要
- 1-2点: 理解困難、背景知識不足

考慮ポイント:
- 説明の論理的構成
- 例の分かりやすさ
- 前提知識の要求レベル
- 文章の読みやすさ
""",
    "novelty": """\
新規性評価 (1-10点):
あなたにとってこの記事の内容がどの程度新しい発見や学びをもたらすかを評価してください。

評価基準:
- 9-10点: 全く知らない内容、大きな発見
- 7-8点: 新しい観点や詳細、有益な学び
- 5-6点: 部分的に新しい内容、復習も含む
- 3-4点: 既知の内容が多い、わずかな学び
- 1-2点: ほぼ既知の内容、新しい学びなし

考慮ポイント:
- 既存知識との差分
- 新しい技術・手法の紹介
- 独自の視点や考察
- 最新情報の含有
""",
    "importance": """\
重要度評価 (1-10点):
現在のあなたの関心や優先度に対して、この記事がどの程度重要かを評価してください。

評価基準:
- 9-10点: 非常に重要、優先的に活用したい
- 7-8点: 重要、近いうちに参考にしたい
- 5-6点: 中程度の重要性、機会があれば活用
- 3-4点: やや関心あり、余裕があれば参考
- 1-2点: 現在の関心対象外

考慮ポイント:
- 現在の業務・プロジェクトとの関連
- 短期・中期の学習目標との適合
- キャリア発展への寄与
- 個人的興味・関心との一致
""",
}

RATING_PROMPT = """\
# 記事評価タスク

## 記事情報
- **タイトル**: {title}
- **URL**: {url}
- **公開日**: {published_date}
- **著者**: {author}
- **推定読書時間**: {reading_time}分
- **文字数**: 約{word_count}文字
- **抽出方法**: {extraction_method}
- **内容品質スコア**: {quality_percent}%
{description_line}

## 記事内容
{preview}

## 評価指示

以下の5つの軸で記事を評価してください。各軸について、詳細な評価基準を参考に1-10点で採点し、その理由を具体的に説明してください。

{axes}

## 出力形式
以下のJSON形式で回答してください:

```json
{{
  "practicalValue": {{
    "score": 8,
    "reason": "具体的なコード例があり、実際のプロジェクトで活用できる内容"
  }},
  "technicalDepth": {{
    "score": 7,
    "reason": "中級者向けの適度な技術詳細が含まれている"
  }},
  "understanding": {{
    "score": 9,
    "reason": "図解が豊富で、論理的な構成により理解しやすい"
  }},
  "novelty": {{
    "score": 6,
    "reason": "一部は既知だが、新しい実装パターンの紹介があった"
  }},
  "importance": {{
    "score": 8,
    "reason": "現在のプロジェクトで使用している技術スタックに直接関連"
  }},
  "comment": "この記事から学んだことや印象を200文字程度でまとめてください"
}}
```

## 重要な注意事項
- 各軸は独立して評価してください
- 個人的な経験と知識レベルを考慮してください
- 評価理由は具体的で建設的な内容にしてください
- 総合的な価値判断ではなく、各軸の基準に従って評価してください

評価完了後は、createArticleRating ツールを使用して結果をシステムに保存してください。"""

FALLBACK_PROMPT = """\
# 記事評価タスク（内容取得失敗）

## 記事情報
- **URL**: {url}
- **状況**: 記事内容の自動取得に失敗しました

## 指示
上記URLにアクセスして記事内容を直接確認し、以下の5つの軸で評価してください：

1. **実用性** (1-10点): 業務や実装で実際に活用できる度合い
2. **技術深度** (1-10点): 技術的な内容の深さ・専門性
3. **理解度** (1-10点): あなたにとっての理解しやすさ
4. **新規性** (1-10点): あなたにとっての新しさ・発見度
5. **重要度** (1-10点): 現在の関心・優先度への適合

## 出力形式
以下のJSON形式で回答してください:

```json
{{
  "practicalValue": {{ "score": X, "reason": "理由..." }},
  "technicalDepth": {{ "score": X, "reason": "理由..." }},
  "understanding": {{ "score": X, "reason": "理由..." }},
  "novelty": {{ "score": X, "reason": "理由..." }},
  "importance": {{ "score": X, "reason": "理由..." }},
  "comment": "この記事から学んだことや印象を200文字程度でまとめてください"
}}
```

評価完了後は、createArticleRating ツールを使用して結果をシステムに保存してください。"""


def content_preview(content: str, limit: int = PREVIEW_CHARS) -> str:
    if len(content) <= limit:
        return content
    return content[:limit] + "..."


def _or_na(value: object) -> object:
    return value if value else NOT_AVAILABLE


def generate_rating_prompt(content: ArticleContent | None, url: str) -> str:
    """Build the rating prompt for *url*.

    ``None`` content (fetch failed or was skipped) yields a prompt asking the
    consumer to open the URL and evaluate the page itself.
    """
    if content is None:
        return FALLBACK_PROMPT.format(url=url)

    metadata = content.metadata
    description_line = f"- **概要**: {metadata.description}" if metadata.description else ""
    axes = "\n\n".join(f"### {key}\n{text}" for key, text in EVALUATION_AXES.items())

    return RATING_PROMPT.format(
        title=content.title,
        url=url,
        published_date=_or_na(metadata.published_date),
        author=_or_na(metadata.author),
        reading_time=_or_na(metadata.reading_time),
        word_count=_or_na(metadata.word_count),
        extraction_method=content.extraction_method,
        quality_percent=round(content.quality_score * 100),
        description_line=description_line,
        preview=content_preview(content.content or ""),
        axes=axes,
    )
