"""Analyze a literary text from a file or stdin and print the study sheet.

Usage:
    python scripts/analyze_text.py poem.txt --type POETRY
    echo "春眠不觉晓" | python scripts/analyze_text.py --type POETRY --save
"""

import argparse
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown

from litmaster.errors import AnalysisFailed, EmptyTextError
from litmaster.llm.analyze import run_analysis
from litmaster.llm.prompts import ANALYSIS_FAILED_NOTICE
from litmaster.log import setup_logging
from litmaster.pipeline.analyzer import Analyzer
from litmaster.rendering.markdown import render_analysis_to_markdown
from litmaster.schemas.analysis import TextType
from litmaster.state import AppState
from litmaster.store.db import init_db

console = Console()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Exam-style literary analysis")
    parser.add_argument("path", nargs="?", help="Text file to analyze (default: stdin)")
    parser.add_argument("--type", dest="text_type", choices=[t.value for t in TextType], default="PROSE")
    parser.add_argument("--save", action="store_true", help="Add the result to the stored history")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG)")
    args = parser.parse_args(argv)

    load_dotenv()
    setup_logging(args.log_level)

    if args.path:
        with open(args.path, "r", encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    text_type = TextType(args.text_type)
    try:
        if args.save:
            init_db()
            result = Analyzer(AppState.load()).analyze(text, text_type)
        else:
            if not text.strip():
                raise EmptyTextError("Text to analyze is empty")
            result = run_analysis(text, text_type)
    except EmptyTextError as e:
        console.print(f"[red]{e}[/red]")
        return 2
    except AnalysisFailed:
        console.print(f"[red]{ANALYSIS_FAILED_NOTICE}[/red]")
        return 1

    console.print(Markdown(render_analysis_to_markdown(result)))
    if args.save:
        console.print(f"[green]Saved as {result.id}[/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
