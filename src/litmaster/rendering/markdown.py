"""Markdown study sheet for an analysis result.

Model output sometimes carries **bold** markers inside field values; they are
stripped so the sheet controls its own emphasis.
"""

from __future__ import annotations

from typing import List

from ..schemas.analysis import AnalysisResult


def clean_text(text: str) -> str:
    if not text:
        return ""
    return text.replace("**", "").replace("__", "")


def _bullet_list(lines: List[str]) -> str:
    return "\n".join(f"- {clean_text(s).strip()}" for s in lines if s and s.strip())


def _numbered_list(lines: List[str]) -> str:
    clean = [clean_text(x).strip() for x in lines if x and x.strip()]
    return "\n".join(f"{i+1}. {s}" for i, s in enumerate(clean))


def render_analysis_to_markdown(result: AnalysisResult) -> str:
    """
    Sections, in order:
      - title with text type
      - summary
      - structure: numbered
      - themes: bullets
      - techniques: name, example, effect
      - questions: question, standard answer, analysis
    """
    header = f"# {clean_text(result.title)}\n\n*{result.text_type.label} · {result.text_type.value}*"
    summary_block = "## 内容概要\n\n" + clean_text(result.summary).strip()
    structure_block = "## 结构梳理\n\n" + _numbered_list(result.structure)
    themes_block = "## 主旨情感\n\n" + _bullet_list(result.themes)

    technique_lines = []
    for t in result.techniques:
        technique_lines.append(
            f"### {clean_text(t.name)}\n\n"
            f"- 例句：{clean_text(t.example)}\n"
            f"- 效果：{clean_text(t.effect)}"
        )
    techniques_block = "## 写作手法\n\n" + "\n\n".join(technique_lines)

    question_lines = []
    for i, q in enumerate(result.generated_questions):
        question_lines.append(
            f"### {i+1}. [{clean_text(q.type)}] {clean_text(q.question)}\n\n"
            f"**标准答案：** {clean_text(q.standard_answer)}\n\n"
            f"**解析：** {clean_text(q.analysis)}"
        )
    questions_block = "## 真题演练\n\n" + "\n\n".join(question_lines)

    return "\n\n".join([
        header, summary_block, structure_block, themes_block, techniques_block, questions_block
    ]) + "\n"
