"""
Prompt template and tool schema for report summaries.
"""

SUMMARY_TOOL = {
    "name": "submit_report_summary",
    "description": "Submit the structured analysis of a reproduction performance report.",
    "input_schema": {
        "type": "object",
        "properties": {
            "highPerformers": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Mother IDs with clearly above-average results.",
            },
            "lowPerformers": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Mother IDs with clearly below-average results.",
            },
            "concerningTrends": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Mother IDs whose results are worsening across periods.",
            },
            "averagePerformers": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Mother IDs not placed in any other category.",
            },
            "potentialRecordErrors": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Mother IDs whose records look inconsistent or mistyped.",
            },
            "insights": {
                "type": "string",
                "description": "Two or three short paragraphs of deeper analysis.",
            },
        },
        "required": [
            "highPerformers",
            "lowPerformers",
            "concerningTrends",
            "averagePerformers",
            "potentialRecordErrors",
            "insights",
        ],
        "additionalProperties": False,
    },
}

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert livestock analyst reviewing reproduction performance "
    "records. You answer only through the provided tool."
)


def get_summary_prompt(
    report_name: str,
    generated_at: str,
    targets: list[str],
    entries: list[str],
) -> str:
    """Build the user prompt describing one report."""
    numbered = "\n".join(f"  {i}. {entry}" for i, entry in enumerate(entries, start=1))
    target_text = ", ".join(targets) if targets else "[none recorded]"

    return f"""Analyse the report below and classify every mother it mentions.

Respond with a JSON object with exactly these keys:
{{
"highPerformers": [],
"lowPerformers": [],
"concerningTrends": [],
"averagePerformers": [],
"potentialRecordErrors": [],
"insights": "A few short paragraphs (2-3) with deeper analysis: the most important findings, possible causes of low performance or concerning trends, and practical management or intervention strategies. Do not dwell on moderate performers, but say so if the group's overall average stands out as particularly good or bad."
}}

Rules:
- Use an empty array when you cannot determine a category.
- Every mother in the report belongs to at least one category.
- Put a mother in 'averagePerformers' only if she is in no other category.
- Be suspicious of questionable records. Flag in 'potentialRecordErrors' (and
  explain in 'insights') anything that looks like a typo or is implausible, e.g.
  more weaned than born, weaning without births, negative or impossible counts,
  duplicated or missing records.
- Any mother you suspect of a record error must appear in 'potentialRecordErrors'.

## REPORT

Report Name: {report_name}
Generated Date: {generated_at}
Target Mothers: {target_text}
Report Entries:
{numbered}
"""
