import pytest
import os
from dotenv import load_dotenv

# Never trace to a real MLflow server from tests
os.environ["MLFLOW_ENABLE_TRACING"] = "false"

from litmaster.schemas.analysis import AnalysisPayload, Question, Technique

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    # Depends on _load_env to ensure .env is loaded first
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture(scope="session")
def openai_api_key(_load_env) -> str | None:
    key = os.getenv("OPENAI_API_KEY")
    if not key or key == "sk-...":
        return None
    return key

# Global setup to ensure we don't accidentally touch the real store

@pytest.fixture(scope="function")
def test_db(tmp_path):
    """
    Creates a temporary key-value store for testing and initializes the schema.
    `store.db` reads settings.DB_PATH on every connection, so patching the
    cached settings singleton is enough.
    """
    db_file = tmp_path / "test_litmaster.db"

    from litmaster.config import get_settings
    settings = get_settings()

    original_db_path = settings.DB_PATH
    settings.DB_PATH = str(db_file)

    from litmaster.store.db import init_db
    init_db()

    yield settings

    # Teardown
    settings.DB_PATH = original_db_path

@pytest.fixture
def sample_payload() -> AnalysisPayload:
    """A plausible model reply for 《春晓》."""
    return AnalysisPayload(
        title="**春晓**赏析",
        summary="诗人描写春日清晨醒来时的所见所闻，表达了对春天的喜爱与惜春之情。",
        structure=["首句写春睡香甜", "次句写鸟鸣", "后两句由风雨联想到落花"],
        themes=["惜春", "热爱自然"],
        techniques=[
            Technique(name="以声写景", example="处处闻啼鸟", effect="以鸟声烘托春晨的生机"),
        ],
        generated_questions=[
            Question(
                id="q1",
                question="“处处闻啼鸟”运用了什么手法？",
                type="Language",
                standard_answer="诗句描述了春晨鸟鸣的画面，运用了以声写景的手法，烘托了生机盎然的意境，抒发了喜爱春天的感情。",
                analysis="按“画面+手法+意境+情感”的答题步骤作答。",
            )
        ],
    )
