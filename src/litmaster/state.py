"""Explicit application state: current user plus analysis history.

Loaded once from the store with AppState.load(); every mutating method
writes through to the store so the state survives a restart.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .errors import ResultNotFound
from .schemas.analysis import AnalysisResult, TextType
from .schemas.user import User
from .store.repo import Repo


class AppState(BaseModel):
    user: Optional[User] = None
    history: List[AnalysisResult] = Field(default_factory=list)

    @classmethod
    def load(cls) -> "AppState":
        return cls(user=Repo.load_current_user(), history=Repo.load_history())

    def set_user(self, user: User):
        self.user = user
        Repo.save_current_user(user)

    def clear_user(self):
        self.user = None
        Repo.clear_current_user()

    def save_result(self, result: AnalysisResult):
        """Replace the entry with the same id, or insert it as the newest."""
        for i, existing in enumerate(self.history):
            if existing.id == result.id:
                self.history[i] = result
                break
        else:
            self.history.insert(0, result)
        Repo.save_history(self.history)

    def get_result(self, result_id: str) -> AnalysisResult:
        for result in self.history:
            if result.id == result_id:
                return result
        raise ResultNotFound(result_id)

    def taken_ids(self) -> List[str]:
        return [r.id for r in self.history]

    def stats(self) -> Dict[str, int]:
        counts = {t: 0 for t in TextType}
        for r in self.history:
            counts[r.text_type] += 1
        return {
            "total": len(self.history),
            "prose": counts[TextType.PROSE],
            "poetry": counts[TextType.POETRY],
            "novel": counts[TextType.NOVEL],
        }

    def badges(self) -> List[str]:
        """Achievement badges earned from the history counts."""
        stats = self.stats()
        earned = ["初级学者"]
        if stats["total"] > 5:
            earned.append("勤奋读者")
        if stats["poetry"] > 3:
            earned.append("诗词达人")
        if stats["novel"] > 3:
            earned.append("小说专家")
        return earned
