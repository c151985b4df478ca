"""LitMaster - an LLM-backed study aid for Chinese literature exams.

Takes a prose, poetry or novel excerpt, asks an LLM for a structured
exam-style analysis, and keeps a follow-up tutor chat grounded in the text.

Components:
- main_api: FastAPI service (auth, analysis, history, tutor chat)
- pipeline: Analyzer session policies (guards, greetings, chat fallback)
- llm: prompt construction, OpenAI client, analyze/chat calls
- store: SQLite key-value store standing in for browser local storage
- accounts: registration and login
- rendering: Markdown study sheet
- mlops: MLflow tracing
"""
