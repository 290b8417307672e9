from typing import TypedDict


class RuleGuidanceEntry(TypedDict, total=False):
    display_name: str
    short_description: str
    rationale: str
    compliant: str
    non_compliant: str
    manual_instructions: str
    references: list[str]
