"""Render a design request submission into a bilingual plain-text email.

Two fixed layouts exist, one per display language. Whatever the display
language, the text-content section always lists both the French and the
English copy supplied by the requester.
"""

from __future__ import annotations

from datetime import date

from .models import RenderedMessage, Submission

#: Every submission goes to the design office; only CC addresses vary.
MAIN_RECIPIENT = "alexandre.rochon@cfp-psc.gc.ca"

_MONTHS = {
    "fr": (
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ),
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}

_INVALID_DATE = {"fr": "Date invalide", "en": "Invalid Date"}

_PRIORITY_LABELS = {
    "low": {"fr": "Faible", "en": "Low"},
    "medium": {"fr": "Moyenne", "en": "Medium"},
    "high": {"fr": "Élevée", "en": "High"},
    "urgent": {"fr": "Très urgent", "en": "Very urgent"},
}

_LOCALE = {
    "fr": {
        "subject": "Demande de design graphique — {title}",
        "not_provided": "(Non fourni)",
        "none_selected": "(Aucun sélectionné)",
        "text_fr_missing": "(Titre uniquement)",
        "text_en_missing": "(Title only)",
        "range": "{material}: {start} à {end}",
        "single": "Un seul visuel",
        "multiple": "Proposer plusieurs options",
    },
    "en": {
        "subject": "Graphic Design Request — {title}",
        "not_provided": "(Not provided)",
        "none_selected": "(None selected)",
        "text_fr_missing": "(Title only)",
        "text_en_missing": "(Title only)",
        "range": "{material}: {start} to {end}",
        "single": "Single visual",
        "multiple": "Propose multiple options",
    },
}

_BODY_FR = """\
Demande de design graphique

Titre de la demande
{title}

Demandeur
Nom: {requester_name}
Courriel: {requester_email}

Contexte & objectif
{context}

Type de matériel
{materials}

Dates
Date de livrable: {delivery_date}
{material_dates}

Niveau de priorité
{priority}

Contenu textuel
Français:
Titre: {title_fr}
Texte: {text_fr}

English:
Titre: {title_en}
Texte: {text_en}

Directives visuelles & références
{guidelines}

Options / variations
{options}"""

_BODY_EN = """\
Graphic Design Request

Request Title
{title}

Requester
Name: {requester_name}
Email: {requester_email}

Context & Objective
{context}

Material Type
{materials}

Dates
Delivery date: {delivery_date}
{material_dates}

Priority Level
{priority}

Text Content
French:
Title: {title_fr}
Text: {text_fr}

English:
Title: {title_en}
Text: {text_en}

Visual Guidelines & References
{guidelines}

Options / Variations
{options}"""

_BODIES = {"fr": _BODY_FR, "en": _BODY_EN}


def _lang(value: str | None) -> str:
    return "fr" if value == "fr" else "en"


def format_date(date_string: str | None, lang: str = "en") -> str:
    """Long-form localized date, e.g. ``5 mars 2024`` / ``March 5, 2024``.

    The input is a calendar date (``YYYY-MM-DD``), so no timezone shift
    applies. Blank input yields ``""``; anything that is not a calendar
    date renders as the localized "invalid date" text instead of failing
    the whole email.
    """
    if not date_string:
        return ""
    lang = _lang(lang)
    try:
        day = date.fromisoformat(date_string)
    except ValueError:
        return _INVALID_DATE[lang]
    month = _MONTHS[lang][day.month - 1]
    if lang == "fr":
        return f"{day.day} {month} {day.year}"
    return f"{month} {day.day}, {day.year}"


def priority_label(value: str | None, lang: str) -> str:
    """Localized priority label; unknown values are returned unchanged."""
    if value is None:
        return ""
    labels = _PRIORITY_LABELS.get(value)
    if labels is None:
        return value
    return labels[_lang(lang)]


def resolve_recipients(submission: Submission) -> tuple[str, list[str]]:
    """Return ``(recipient, cc)``; blank and null CC entries are dropped."""
    cc = [email.strip() for email in submission.cc_emails if email and email.strip()]
    return MAIN_RECIPIENT, cc


def render_email(submission: Submission) -> tuple[str, str]:
    """Render ``(subject, body)`` in the submission's language."""
    lang = _lang(submission.language)
    locale = _LOCALE[lang]
    text = submission.text_content

    material_dates = "\n".join(
        locale["range"].format(
            material=material,
            start=format_date(window.start, lang),
            end=format_date(window.end, lang),
        )
        for material, window in submission.material_dates.items()
    )

    body = _BODIES[lang].format(
        title=submission.title,
        requester_name=submission.requester_name,
        requester_email=submission.requester_email,
        context=submission.context or locale["not_provided"],
        materials=", ".join(submission.materials_list) or locale["none_selected"],
        delivery_date=format_date(submission.delivery_date, lang),
        material_dates=material_dates,
        priority=priority_label(submission.priority, lang),
        title_fr=text.title_fr or "",
        text_fr=text.text_fr or locale["text_fr_missing"],
        title_en=text.title_en or "",
        text_en=text.text_en or locale["text_en_missing"],
        guidelines=submission.guidelines or locale["not_provided"],
        options=locale["single"] if submission.options == "single" else locale["multiple"],
    )
    # Header values cannot carry line breaks; fold the title onto one line.
    subject = locale["subject"].format(title=" ".join(submission.title.split()))
    return subject, body


def build_message(submission: Submission, sender_override: str | None = None) -> RenderedMessage:
    """Render and address a submission.

    The sender defaults to the requester unless an override is configured;
    replies always go back to the requester.
    """
    subject, body = render_email(submission)
    recipient, cc = resolve_recipients(submission)
    return RenderedMessage(
        subject=subject,
        body=body,
        sender=sender_override or submission.requester_email,
        recipient=recipient,
        reply_to=submission.requester_email,
        cc=cc,
    )
