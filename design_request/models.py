"""Request, message and response models for design request submissions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MaterialDates(BaseModel):
    """Start/end window for one requested material."""

    start: str | None = None
    end: str | None = None


class TextContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title_fr: str | None = Field(default=None, alias="titleFr")
    text_fr: str | None = Field(default=None, alias="textFr")
    title_en: str | None = Field(default=None, alias="titleEn")
    text_en: str | None = Field(default=None, alias="textEn")


class Submission(BaseModel):
    """One graphic design request as posted by the web form.

    Field names follow the form's camelCase keys through aliases;
    ``populate_by_name=True`` allows construction via either spelling.
    ``priority``, ``options`` and ``language`` are kept as plain strings
    because unknown values are rendered, not rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    requester_name: str = Field(alias="requesterName")
    requester_email: str = Field(alias="requesterEmail")
    context: str | None = None
    delivery_date: str | None = Field(default=None, alias="deliveryDate")
    priority: str | None = None
    options: str | None = None
    guidelines: str | None = None
    language: str = "fr"
    material_dates: dict[str, MaterialDates] = Field(default_factory=dict, alias="materialDates")
    materials_list: list[str] = Field(default_factory=list, alias="materialsList")
    text_content: TextContent = Field(default_factory=TextContent, alias="textContent")
    cc_emails: list[str | None] = Field(default_factory=list, alias="ccEmails")


@dataclass(frozen=True)
class RenderedMessage:
    """A fully addressed plain-text email, ready for the transport."""

    subject: str
    body: str
    sender: str
    recipient: str
    reply_to: str
    cc: list[str] = field(default_factory=list)


class DeliveryOutcome(str, Enum):
    sent = "sent"
    failed = "failed"
    skipped = "skipped"


@dataclass(frozen=True)
class DeliveryReport:
    outcome: DeliveryOutcome
    error: str | None = None

    @property
    def email_sent(self) -> bool:
        # "skipped" counts as sent: unconfigured transports are a dev fallback.
        return self.outcome is not DeliveryOutcome.failed


# ------------------------------------------------------------------
# API responses
# ------------------------------------------------------------------


class SubmitDebug(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_sent: bool = Field(alias="emailSent")
    send_error: str | None = Field(default=None, alias="sendError")
    recipient: str
    cc_emails: list[str] = Field(default_factory=list, alias="ccEmails")


class SubmitResponse(BaseModel):
    success: bool = True
    message: str
    debug: SubmitDebug | None = None


class SubmitErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "Server is running"
