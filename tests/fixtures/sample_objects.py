import re

from flowscope.core.prompt import grammar

# Matches the name list every record prompt carries
_NAMES_LINE = re.compile(r"flows you must analyze are: (.*)$", re.MULTILINE)

sample_overview = "The selected flows keep account data consistent across sales and service."
sample_risks = "**Recursive updates** - Two flows update the same Account field on save."
sample_improvements = "**Consolidate triggers**\n    **Benefits:** Fewer DML statements"


def canonical_record_section(name: str, description: str, improvements: str) -> str:
    return (
        f"{grammar.format_record(name)}\n"
        f"{grammar.format_label(grammar.DESCRIPTION_LABEL)} {description}\n\n"
        f"{grammar.format_label(grammar.IMPROVEMENTS_LABEL)} {improvements}\n"
    )


def canonical_response(names: list[str], with_globals: bool = True) -> str:
    """
    A response that follows the requested grammar exactly.
    Descriptions and improvements are derived from the record name so tests can check attribution.
    """
    parts = []
    if with_globals:
        parts.append(f"{grammar.format_section(grammar.OVERVIEW_HEADER)}\n{sample_overview}\n")
        parts.append(f"{grammar.format_section(grammar.RISKS_HEADER)}\n{sample_risks}\n")
        parts.append(
            f"{grammar.format_section(grammar.IMPROVEMENTS_HEADER)}\n{sample_improvements}\n"
        )
        parts.append(f"{grammar.format_section(grammar.INDIVIDUAL_HEADER)}\n")
    for name in names:
        parts.append(
            canonical_record_section(name, f"Description of {name}.", f"Improve {name}.")
        )
    return "\n".join(parts)


def names_in_prompt(prompt: str) -> list[str]:
    match = _NAMES_LINE.search(prompt)
    if not match:
        return []
    return [name.strip() for name in match.group(1).split(",") if name.strip()]


def echo_responder(prompt: str) -> str:
    """
    Answers any record prompt canonically for exactly the records it names.
    The organization summary prompt names no records and gets only the global sections.
    """
    return canonical_response(names_in_prompt(prompt))
