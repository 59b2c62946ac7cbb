"""Deterministic provider used to verify the pipeline without API calls."""

import logging
import re

from claude_issue_runner.llm.provider import LLMProvider

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 400
MAX_BULLETS = 8
MAX_BULLET_CHARS = 140

STUB_TEMPLATE = """[STUB OUTPUT]

## 自動実行の検証用ダミー出力

### 概要
- これは配管検証用のダミー出力です
- PROVIDER=stub で生成されています

### 入力サマリ
{bullets}

### 次の手順
- この PR をレビューして配管を確認する
- PROVIDER=anthropic or openai に切替えて本番検証

✅ Pipeline OK（stub）"""


def excerpt_bullets(issue_body: str) -> list[str]:
    """Bullet lines for the first `EXCERPT_CHARS` characters of the body."""

    excerpt = issue_body.replace("\r", "")[:EXCERPT_CHARS]
    lines = [line.strip() for line in re.split(r"\n+", excerpt) if line.strip()]
    return [f"- {line[:MAX_BULLET_CHARS]}" for line in lines[:MAX_BULLETS]]


class StubProvider(LLMProvider):
    name = "stub"

    @property
    def model(self) -> str:
        return "stub"

    def generate(self, issue_body: str) -> str:
        bullets = "\n".join(excerpt_bullets(issue_body))
        logger.debug(f"Rendering stub output from {len(issue_body)} characters")
        return STUB_TEMPLATE.format(bullets=bullets or "- (入力なし)")
