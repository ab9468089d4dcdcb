"""
jinja2 prompt templates. Rendered through Prompt, so every variable must be supplied.
Grammar tokens are passed in as variables to keep a single source of truth in grammar.py.
"""

full_analysis_prompt = """
You are a Salesforce Flow Analyst. Analyze ALL {{ record_count }} flows provided and respond using exactly this structure:

{{ overview_header }}
Write a 100-150 word overview of the global flow architecture.

{{ risks_header }}
Identify risks like infinite loops, governor limits and data integrity issues.

{{ improvements_header }}
List improvement opportunities with benefits and implementation steps.

{{ individual_header }}
IMPORTANT: Analyze EVERY SINGLE flow provided. Do not skip any flows due to length constraints.
For each flow:
{{ record_marker }} [Exact Flow Name]
{{ description_label }} 100-150 word description in simple terms a 12-year-old could understand
{{ improvements_label }} Specific improvements with benefits and implementation guidance

Requirements:
- MUST analyze all {{ record_count }} flows - no exceptions
- Use the exact flow names from the data as the {{ record_marker }} headers
- Use simple language, avoid technical jargon
- Focus on high-impact improvements only
- Be specific about implementation (element names, when to call, etc.)
- If you encounter length limits, prioritize individual flow analysis over other sections

The {{ record_count }} flows you must analyze are: {{ record_names | join(", ") }}

Flow data:
{{ data }}
""".strip()


chunk_analysis_prompt = """
You are a Salesforce Flow Analyst. You MUST analyze ALL {{ record_count }} flows provided in this batch (batch {{ chunk_number }} of {{ total_chunks }}). Do not skip any flows.

For EACH AND EVERY flow provided, respond with:
{{ record_marker }} [Exact Flow Name]
{{ description_label }} 100-150 word description in simple terms a 12-year-old could understand

{{ improvements_label }}

**Must Have (Critical):**
- **[Bold improvement title]** - [Description] *(Estimated time: [X hours/days for an experienced consultant])*

**Nice to Have (Optional):**
- **[Bold improvement title]** - [Description] *(Estimated time: [X hours/days for an experienced consultant])*

CRITICAL REQUIREMENTS:
- ANALYZE ALL {{ record_count }} FLOWS - DO NOT SKIP ANY
- Use the exact flow names from the data as the {{ record_marker }} headers
- Do not add global overview, risk or improvement sections
- Use simple language, avoid technical jargon
- Categorize improvements as "Must Have" (likely to cause bugs/issues) vs "Nice to Have"
- Make recommendations actionable for Salesforce admins

The {{ record_count }} flows you must analyze are: {{ record_names | join(", ") }}

Flow data:
{{ data }}
""".strip()


summary_analysis_prompt = """
You are a Salesforce Flow Analyst. Analyze the global flow architecture described by the summary below and respond using exactly this structure:

{{ overview_header }}
Write a 100-150 word overview of the global flow architecture.

{{ risks_header }}
For each risk, use this format:
**[Risk Name]** - Description of the risk and its impact.

{{ improvements_header }}
For each improvement, use this format:
**[Improvement Name]**
    **Benefits:** List of benefits
    **Implementation Steps:**
        1. Step one
        2. Step two

Requirements:
- Focus on architectural and global patterns across all {{ record_count }} flows
- Be specific about implementation steps
- Make recommendations actionable for Salesforce admins

Global summary:
{{ summary }}
""".strip()


followup_prompt = """
Based on our previous analysis of the Salesforce flows, please answer this follow-up question:

Question: {{ question }}

Context from previous analysis:
- Org: {{ source_alias }}
- Total flows: {{ record_count }}
- Flow types: {{ categories }}
- Flow names: {{ record_names | join(", ") }}

Previous analysis results:
{{ previous_result }}

Please provide a detailed, helpful answer based on the flow analysis context above.
""".strip()


exploration_prompt = """
You are a Salesforce Flow expert helping a user understand their flow JSON data.

User question: {{ message }}

Flow data for analysis:
{{ data }}

Please provide a clear, helpful answer about the flow data. You can:
- Explain flow structure and elements
- Identify specific elements, variables, decisions, screens
- Analyze flow logic and paths
- Suggest improvements or point out potential issues
- Answer questions about specific configuration values

Keep your response conversational and practical. If the user asks about specific elements, reference them by name and explain their purpose.
""".strip()
