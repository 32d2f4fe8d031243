import pytest

from thinking_tools.core.errors import ModelRequestError
from thinking_tools.tools.dispatcher import ToolDispatcher


class FakeLLM:
    """Stands in for LLMClient: records transcripts, answers 'response N'."""

    def __init__(self, fail_on: int | None = None):
        self.calls: list[list[dict]] = []
        self.fail_on = fail_on

    def chat(self, messages):
        self.calls.append([dict(m) for m in messages])
        n = len(self.calls)
        if self.fail_on == n:
            raise ModelRequestError("quota exceeded")
        return f"response {n}"


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture
def dispatcher(out_dir, fake_llm):
    d = ToolDispatcher(out_dir, fake_llm)
    d.prepare()
    return d


@pytest.fixture
def sales_csv(tmp_path):
    p = tmp_path / "sales.csv"
    p.write_text(
        "month,revenue,region\n"
        "Jan,100,north\n"
        "Feb,250.5,south\n"
        'Mar,n/a,"east, coast"\n'
        "Apr,300,west\n"
        "May,,north\n"
        "Jun,410,south\n",
        encoding="utf-8",
    )
    return p


@pytest.fixture
def empty_csv(tmp_path):
    p = tmp_path / "empty.csv"
    p.write_text("month,revenue\n", encoding="utf-8")
    return p


@pytest.fixture
def one_column_csv(tmp_path):
    p = tmp_path / "single.csv"
    p.write_text("name\nalice\nbob\n", encoding="utf-8")
    return p
