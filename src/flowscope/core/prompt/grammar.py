"""
The output grammar requested from the model, shared by the prompt templates and the parser.

    ## Global Overview
    ## Potential Risks
    ## Global Improvements
    ## Individual Record Analysis
    ### <Record Name>
    **Business Description:** ...
    **Improvement Opportunities:** ...

Models do not always comply, so the parser also recognizes the synonyms listed here.
"""

SECTION_MARKER = "##"
RECORD_MARKER = "###"

OVERVIEW_HEADER = "Global Overview"
RISKS_HEADER = "Potential Risks"
IMPROVEMENTS_HEADER = "Global Improvements"
INDIVIDUAL_HEADER = "Individual Record Analysis"

DESCRIPTION_LABEL = "Business Description"
IMPROVEMENTS_LABEL = "Improvement Opportunities"

# Header synonyms, checked in this order (lowercase substring match).
# "individual" comes first so "Individual Flow Improvements" is not read as a global section.
SECTION_SYNONYMS: list[tuple[str, tuple[str, ...]]] = [
    (
        "individual",
        (
            "individual record analysis",
            "individual flow analysis",
            "individual analysis",
            "individual",
            "flow analysis",
            "record analysis",
            "per-flow",
            "per flow",
        ),
    ),
    (
        "overview",
        (
            "global overview",
            "organization overview",
            "global flow architecture",
            "overview",
            "summary",
        ),
    ),
    ("risks", ("potential risks", "risks", "risk", "concerns")),
    (
        "improvements",
        (
            "global improvements",
            "organization-wide improvements",
            "improvements",
            "improvement",
            "recommendations",
        ),
    ),
]

# Field label synonyms, used when the exact label is missing
DESCRIPTION_SYNONYMS = (
    "Business Description",
    "Description",
    "Business Purpose",
    "Purpose",
    "What it does",
    "Summary",
    "Overview",
)
IMPROVEMENT_SYNONYMS = (
    "Improvement Opportunities",
    "Improvements",
    "Improvement",
    "Recommendations",
    "Suggestions",
    "Optimization Opportunities",
    "Opportunities",
    "Must Have",
    "Nice to Have",
)


def format_section(header: str) -> str:
    return f"{SECTION_MARKER} {header}"


def format_record(name: str) -> str:
    return f"{RECORD_MARKER} {name}"


def format_label(label: str) -> str:
    return f"**{label}:**"
