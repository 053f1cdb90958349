"""
HTML snippets for the total cards.

User names and the currency symbol come from configuration, so every
value is escaped before it goes into markup rendered as raw HTML.
"""

import html


def format_money(currency_symbol: str, value: str) -> str:
    """Prefix a formatted amount with the currency symbol."""
    return f"{currency_symbol}{value}"


def total_card_html(title: str, amount: str, css_class: str = "total-card",
                    heading: str = "h4") -> str:
    """Card with a heading and a big amount, values escaped."""
    return (
        f'<div class="{css_class}">'
        f"<{heading}>{html.escape(title)}</{heading}>"
        f'<p class="big-number">{html.escape(amount)}</p>'
        f"</div>"
    )
