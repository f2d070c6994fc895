"""Per-version description text: deprecation notice, sunset date and links."""

import datetime
import html

from api_doc_pipeline.routing.base import Link, VersionDescriptor

DEPRECATION_NOTICE = "This API version has been deprecated."


def describe_version(base_description: str, descriptor: VersionDescriptor) -> str:
    """Compose the document description for a version.

    Returns ``base_description`` unchanged for a current version with no
    sunset policy.
    """
    text = base_description

    if descriptor.deprecated:
        text = _append_sentence(text, DEPRECATION_NOTICE)

    policy = descriptor.sunset_policy
    if policy is not None:
        if policy.date is not None:
            text = _append_sentence(text, f"The API will be sunset on {format_short_date(policy.date)}.")

        links = policy.human_readable_links
        if links:
            text += "\n" + _render_links(links)

    return text


def format_short_date(value: datetime.date) -> str:
    """US short date, e.g. 1/5/2026."""
    return f"{value.month}/{value.day}/{value.year}"


def _append_sentence(text: str, sentence: str) -> str:
    if not text:
        return sentence
    if not text.endswith("."):
        text += "."
    return f"{text} {sentence}"


def _render_links(links: list[Link]) -> str:
    items = []
    for link in links:
        label = link.title or link.href
        items.append(f'<li><a href="{html.escape(link.href)}">{html.escape(label)}</a></li>')
    return "<h4>Links</h4><ul>" + "".join(items) + "</ul>"
