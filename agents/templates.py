"""
Template Renderer
------------------
Two fixed outreach emails per persona. Pure string substitution: the same
persona and product name always give byte-identical output.
"""

from dataclasses import dataclass, replace

from models.schemas import CustomerPersona


@dataclass(frozen=True)
class EmailTemplates:
    sales_email: str
    discovery_email: str


def top_priority(cares_most_about: str) -> str:
    """First comma-separated item, or the whole string if there is no comma."""
    return cares_most_about.split(",")[0]


def render_sales_email(persona: CustomerPersona, product_name: str) -> str:
    return f"""Subject: Streamline Your {persona.name}'s Workflow with {product_name}

Dear [Name],

I hope this email finds you well. I understand that as a {persona.name}, you're focused on {persona.cares_most_about}.

{product_name} was specifically designed to address these priorities while eliminating concerns about {persona.cares_least_about}.

I'd love to schedule a brief 30-minute call to show you how {product_name} can help you:
- Maximize {top_priority(persona.cares_most_about)}
- Streamline your workflow
- Achieve better results with less effort

Would you be available for a quick call this week? I have slots open on Tuesday at 2 PM or Thursday at 10 AM.

Best regards,
[Your name]"""


def render_discovery_email(persona: CustomerPersona, product_name: str) -> str:
    # product_name is unused: the discovery email does not name the product
    return f"""Subject: Quick question about your {persona.name} challenges

Hi [Name],

I'm reaching out because we've been working with several {persona.name}s who are dealing with challenges around {persona.cares_most_about}.

I'd love to learn more about:
- How you're currently handling these challenges
- What solutions you've tried before
- What would make the biggest impact on your workflow

Would you be open to a 15-minute conversation to share your insights? Your experience would be invaluable for our research.

Best regards,
[Your name]"""


def render_templates(persona: CustomerPersona, product_name: str) -> EmailTemplates:
    return EmailTemplates(
        sales_email=render_sales_email(persona, product_name),
        discovery_email=render_discovery_email(persona, product_name),
    )


def apply_templates(persona: CustomerPersona, product_name: str) -> CustomerPersona:
    """Copy of ``persona`` with both emails set."""
    emails = render_templates(persona, product_name)
    return replace(
        persona,
        sales_email=emails.sales_email,
        discovery_email=emails.discovery_email,
    )
