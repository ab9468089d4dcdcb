from tests.fixtures.sample_objects import (
    canonical_record_section,
    canonical_response,
    echo_responder,
    names_in_prompt,
    sample_overview,
    sample_risks,
    sample_improvements,
)
from tests.fixtures.fake_clients import (
    ScriptedClient,
    always_overloaded,
    overload_error,
    overloaded_when,
)

__all__ = [
    "ScriptedClient",
    "always_overloaded",
    "canonical_record_section",
    "canonical_response",
    "echo_responder",
    "names_in_prompt",
    "overload_error",
    "overloaded_when",
    "sample_improvements",
    "sample_overview",
    "sample_risks",
]
