"""Prompt loading and construction.

Prompts ship as YAML documents inside the package (prompts/<name>.yaml,
text under the `content` key); a .md file of the same name also works.
"""

import yaml
from functools import lru_cache
from pathlib import Path

from ..schemas.analysis import TextType

PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"

# Fixed chat texts shown to the student
ANALYSIS_GREETING = (
    "你好！我是你的语文助教壮壮。我已经分析了这篇{label}。"
    "你可以问我关于文中具体字词的含义、写作手法或主旨的问题。"
)
WELCOME_BACK_GREETING = "欢迎回来！我们正在回顾《{title}》。有什么想复习的吗？"
CHAT_FALLBACK_REPLY = "网络错误，请稍后再试。"
EMPTY_REPLY = "Sorry, I couldn't generate a response."
ANALYSIS_FAILED_NOTICE = "分析失败，请重试。请确保您的 API Key 有效。"


@lru_cache()
def load_prompt(name: str) -> str:
    # Prioritize .yaml for structured prompts
    yaml_path = PROMPT_DIR / f"{name}.yaml"
    if yaml_path.exists():
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data.get("content", "")

    # Fallback to .md
    md_path = PROMPT_DIR / f"{name}.md"
    if md_path.exists():
        with open(md_path, "r", encoding="utf-8") as f:
            return f.read()

    raise FileNotFoundError(f"Prompt {name} not found as .yaml or .md")


def system_instruction() -> str:
    return load_prompt("system_instruction")


def build_analysis_prompt(text: str, text_type: TextType) -> str:
    return load_prompt("analyze").format(text_type=text_type.value, text=text)


def build_tutor_instruction(context_text: str) -> str:
    """System instruction for the tutor, grounded in the analyzed text."""
    context = load_prompt("tutor").format(context_text=context_text)
    return f"{system_instruction().rstrip()}\n\n{context}"
