import json

import pytest

from thinking_tools.agents.eda_prompts import build_eda_prompts
from thinking_tools.core.errors import EmptyDatasetError


def _records(n):
    return [{"id": str(i), "value": str(i * 10)} for i in range(n)]


def test_basic_mode_returns_one_prompt():
    prompts = build_eda_prompts(_records(12), "basic")
    assert len(prompts) == 1
    p = prompts[0]
    assert "with 12 rows and the following columns: id, value." in p
    assert "Here's a sample of the first 5 rows:" in p
    assert "Data quality assessment (missing values, duplicates)" in p
    assert "Recommendations for further analysis" in p


def test_detailed_mode_is_basic_plus_extended():
    records = _records(3)
    basic = build_eda_prompts(records, "basic")
    detailed = build_eda_prompts(records, "detailed")
    assert len(detailed) == 2
    assert detailed[0] == basic[0]
    ext = detailed[1]
    assert "comprehensive Exploratory Data Analysis (EDA)" in ext
    assert "Sample data (3 rows):" in ext
    for section in ("Outlier detection", "Feature importance analysis", "Business insights and actionable recommendations"):
        assert section in ext


def test_sample_is_embedded_verbatim():
    records = _records(8)
    prompt = build_eda_prompts(records, "basic")[0]
    assert json.dumps(records[:5], indent=2) in prompt
    assert '"id": "5"' not in prompt


def test_default_mode_is_detailed():
    assert len(build_eda_prompts(_records(2))) == 2


def test_empty_and_unknown_mode():
    with pytest.raises(EmptyDatasetError):
        build_eda_prompts([], "basic")
    with pytest.raises(ValueError):
        build_eda_prompts(_records(1), "quick")
