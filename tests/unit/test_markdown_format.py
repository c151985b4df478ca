from litmaster.rendering.markdown import clean_text, render_analysis_to_markdown
from litmaster.schemas.analysis import AnalysisResult, TextType


def _result(sample_payload) -> AnalysisResult:
    return AnalysisResult(
        **sample_payload.model_dump(),
        id="1",
        text_type=TextType.POETRY,
        timestamp=1,
        original_text="春眠不觉晓",
    )


def test_sections_in_order(sample_payload):
    md = render_analysis_to_markdown(_result(sample_payload))
    headings = ["## 内容概要", "## 结构梳理", "## 主旨情感", "## 写作手法", "## 真题演练"]
    positions = [md.index(h) for h in headings]
    assert positions == sorted(positions)
    assert md.startswith("# 春晓赏析\n\n*诗歌 · POETRY*")


def test_structure_numbered_and_themes_bulleted(sample_payload):
    md = render_analysis_to_markdown(_result(sample_payload))
    assert "1. 首句写春睡香甜\n2. 次句写鸟鸣\n3. 后两句由风雨联想到落花" in md
    assert "- 惜春\n- 热爱自然" in md


def test_question_block(sample_payload):
    md = render_analysis_to_markdown(_result(sample_payload))
    assert "### 1. [Language] “处处闻啼鸟”运用了什么手法？" in md
    assert "**标准答案：** 诗句描述了" in md
    assert "**解析：** 按" in md


def test_clean_text_strips_bold_markers():
    assert clean_text("**春晓**赏析") == "春晓赏析"
    assert clean_text("__x__") == "x"
    assert clean_text("") == ""
