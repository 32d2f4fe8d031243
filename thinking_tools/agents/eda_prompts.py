# thinking_tools/agents/eda_prompts.py
from __future__ import annotations
import json
from typing import List, Sequence
from jinja2 import Template

from thinking_tools.core.errors import EmptyDatasetError
from thinking_tools.core.types import Record, AnalysisType

SAMPLE_ROWS = 5

BASIC_TMPL = Template("""
Analyze this CSV dataset with {{ row_count }} rows and the following columns: {{ columns }}.
Here's a sample of the first {{ sample_size }} rows:
{{ sample_json }}

Please provide:
1. Basic statistical summary for each column
2. Data quality assessment (missing values, duplicates)
3. Key insights and patterns
4. Potential correlations between variables
5. Recommendations for further analysis
""", keep_trailing_newline=True)

DETAILED_TMPL = Template("""
Perform a comprehensive Exploratory Data Analysis (EDA) on this CSV dataset with {{ row_count }} rows and columns: {{ columns }}.
Sample data ({{ sample_size }} rows):
{{ sample_json }}

Please provide:
1. Detailed statistical analysis for each column including:
   - Distribution analysis
   - Central tendency measures
   - Dispersion measures
   - Outlier detection
2. Comprehensive data quality assessment:
   - Missing values analysis
   - Duplicate records
   - Data consistency
   - Data validation issues
3. Advanced pattern recognition:
   - Temporal patterns (if applicable)
   - Grouping patterns
   - Unusual patterns or anomalies
4. Correlation analysis:
   - Relationships between variables
   - Potential causation indicators
5. Feature importance analysis
6. Recommendations for:
   - Data preprocessing
   - Feature engineering
   - Modeling approaches
   - Further analysis steps
7. Visualization suggestions
8. Business insights and actionable recommendations
""", keep_trailing_newline=True)


def _context(records: Sequence[Record]) -> dict:
    sample_size = min(len(records), SAMPLE_ROWS)
    return {
        "row_count": len(records),
        "columns": ", ".join(records[0].keys()),
        "sample_size": sample_size,
        "sample_json": json.dumps(list(records[:sample_size]), indent=2, ensure_ascii=False),
    }


def build_eda_prompts(records: Sequence[Record], analysis_type: AnalysisType = "detailed") -> List[str]:
    """Render the EDA prompt(s) for a materialized record list.

    basic -> [basic]; detailed -> [basic, detailed]. The model does the analysis.
    """
    if not records:
        raise EmptyDatasetError("CSV file is empty or could not be parsed")
    if analysis_type not in ("basic", "detailed"):
        raise ValueError(f"unknown analysis type: {analysis_type}")
    ctx = _context(records)
    basic = BASIC_TMPL.render(**ctx)
    if analysis_type == "basic":
        return [basic]
    return [basic, DETAILED_TMPL.render(**ctx)]
