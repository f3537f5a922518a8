"""
LangChain prompt template for the system rule preamble stored as the first chat turn.
"""
from langchain_core.prompts import PromptTemplate

SYSTEM_RULES_TEMPLATE = """\
Title: {title}.

Rules:
- If the user asks to 'install' or 'setup' software, ALWAYS call request_install first.
- If that returns multiple versions, show them and wait for the user's choice.
- If exactly one match, proceed (backend may create the ticket).
- If no match, backend creates a ticket automatically.
- If the user asks about an incident (INC...), call show_status.
- If the user asks about sales data, business metrics, or requests a chart, show the appropriate visualization.
"""

system_rules_prompt = PromptTemplate(
    input_variables=["title"],
    template=SYSTEM_RULES_TEMPLATE,
)


def render_system_rules(title: str) -> str:
    return system_rules_prompt.format(title=title)
