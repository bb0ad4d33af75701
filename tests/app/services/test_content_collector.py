"""Testes do ContentCollector (snapshot do item)."""

from __future__ import annotations

import asyncio
import base64

import pytest

from app.domain.snapshot import EmailAddressDetails
from app.protocols.host import AttachmentContent, AttachmentDetails, HostResult
from app.services import ContentCollector, encode_attachment_data
from config.settings import PolicyConfig
from tests.fakes.fake_host import NEVER, FakeHostItem

FAST = PolicyConfig(
    field_timeout_ms=50,
    body_timeout_ms=50,
    attachments_list_timeout_ms=50,
    attachment_content_timeout_ms=50,
)


def _message(**kwargs) -> FakeHostItem:
    fields = {
        "subject": "Proposta",
        "from": {"emailAddress": "ana@example.com", "displayName": "Ana"},
        "to": ["bob@example.com", {"emailAddress": "carol@example.com", "displayName": "Carol"}],
        "cc": [],
        "bcc": ["dan@example.com"],
    }
    fields.update(kwargs.pop("fields", {}))
    return FakeHostItem(item_type="message", fields=fields, **kwargs)


class TestCollectFields:
    """Campos, corpo e mapeamento por tipo de item."""

    @pytest.mark.asyncio
    async def test_message_snapshot(self) -> None:
        item = _message(body="<html><head>x</head><body>Olá <b>mundo</b></body></html>")

        snapshot = await ContentCollector().collect(item, FAST)

        assert snapshot.subject == "Proposta"
        assert isinstance(snapshot.sender, EmailAddressDetails)
        assert snapshot.sender.email_address == "ana@example.com"
        assert snapshot.to[0] == "bob@example.com"
        assert isinstance(snapshot.to[1], EmailAddressDetails)
        assert snapshot.cc == []
        assert snapshot.bcc == ["dan@example.com"]
        assert snapshot.location == ""
        assert snapshot.body == "Olá mundo"
        # mensagem não tem location: o host não é consultado
        assert "location" not in item.calls

    @pytest.mark.asyncio
    async def test_appointment_field_mapping(self) -> None:
        item = FakeHostItem(
            item_type="appointment",
            fields={
                "subject": "Reunião",
                "organizer": "org@example.com",
                "requiredAttendees": ["a@example.com"],
                "optionalAttendees": ["b@example.com"],
                "location": "Sala 3",
            },
        )

        snapshot = await ContentCollector().collect(item, FAST)

        assert snapshot.sender == "org@example.com"
        assert snapshot.to == ["a@example.com"]
        assert snapshot.cc == ["b@example.com"]
        assert snapshot.bcc == []
        assert snapshot.location == "Sala 3"
        assert "bcc" not in item.calls

    @pytest.mark.asyncio
    async def test_unsupported_item_type_raises(self) -> None:
        with pytest.raises(ValueError, match="não suportado"):
            await ContentCollector().collect(FakeHostItem(item_type="contact"), FAST)

    @pytest.mark.asyncio
    async def test_host_failures_default_without_aborting_siblings(self) -> None:
        item = _message(
            fields={"subject": HostResult.failed("denied"), "to": "não é lista"},
            body=HostResult.failed("denied"),
        )

        snapshot = await ContentCollector().collect(item, FAST)

        assert snapshot.subject == ""
        assert snapshot.to == []
        assert snapshot.body == ""
        assert snapshot.bcc == ["dan@example.com"]

    @pytest.mark.asyncio
    async def test_all_getters_slow_resolve_to_defaults_at_field_timeout(self) -> None:
        item = FakeHostItem(
            fields={name: NEVER for name in ("subject", "from", "to", "cc", "bcc")},
            body=NEVER,
            attachments=NEVER,
        )
        loop = asyncio.get_running_loop()
        started = loop.time()

        snapshot = await ContentCollector().collect(item, FAST)

        elapsed = loop.time() - started
        assert elapsed < 0.5
        assert snapshot.subject == ""
        assert snapshot.sender == ""
        assert snapshot.to == snapshot.cc == snapshot.bcc == []
        assert snapshot.body == ""
        assert snapshot.attachments == []

    @pytest.mark.asyncio
    async def test_custom_html_normalizer(self) -> None:
        item = _message(body="<p>x</p>")
        snapshot = await ContentCollector(html_normalizer=str.upper).collect(item, FAST)
        assert snapshot.body == "<P>X</P>"


class TestCollectAttachments:
    """Lista, conteúdo em paralelo e descarte individual."""

    @pytest.mark.asyncio
    async def test_partial_resolution_keeps_resolved_attachment(self) -> None:
        item = _message(
            attachments=[
                AttachmentDetails(id="a1", name="ok.pdf", content_type="application/pdf"),
                AttachmentDetails(id="a2", name="lento.pdf"),
            ],
            contents={
                "a1": AttachmentContent(format="base64", content="JVBERi0="),
                "a2": NEVER,
            },
        )

        snapshot = await ContentCollector().collect(item, FAST)

        assert len(snapshot.attachments) == 1
        attachment = snapshot.attachments[0]
        assert attachment.file_name == "ok.pdf"
        assert attachment.data == "JVBERi0="
        assert attachment.content_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_contents_fetched_concurrently(self) -> None:
        details = [AttachmentDetails(id=f"a{i}", name=f"{i}.txt") for i in range(5)]
        item = _message(
            attachments=details,
            contents={d.id: AttachmentContent(format="base64", content="eA==") for d in details},
            delays={f"attachment:{d.id}": 0.03 for d in details},
        )
        policy = PolicyConfig(attachment_content_timeout_ms=100, field_timeout_ms=100)
        loop = asyncio.get_running_loop()
        started = loop.time()

        snapshot = await ContentCollector().collect(item, policy)

        assert len(snapshot.attachments) == 5
        assert loop.time() - started < 0.1

    @pytest.mark.asyncio
    async def test_text_content_is_base64_encoded(self) -> None:
        item = _message(
            attachments=[{"id": "e1", "name": "convite.ics", "contentType": "text/calendar"}],
            contents={"e1": {"format": "iCalendar", "content": "BEGIN:VCALENDAR"}},
        )

        snapshot = await ContentCollector().collect(item, FAST)

        assert snapshot.attachments[0].data == base64.b64encode(b"BEGIN:VCALENDAR").decode()
        assert snapshot.attachments[0].content_type == "text/calendar"

    @pytest.mark.asyncio
    async def test_non_ascii_text_content_is_dropped(self) -> None:
        item = _message(
            attachments=[
                AttachmentDetails(id="u1", name="acentos.eml"),
                AttachmentDetails(id="u2", name="ascii.eml"),
            ],
            contents={
                "u1": AttachmentContent(format="eml", content="Atenção"),
                "u2": AttachmentContent(format="eml", content="plain"),
            },
        )

        snapshot = await ContentCollector().collect(item, FAST)

        assert [a.file_name for a in snapshot.attachments] == ["ascii.eml"]

    @pytest.mark.asyncio
    async def test_host_without_attachment_api(self) -> None:
        item = _message(attachments=NEVER, supports_attachments=False)
        snapshot = await ContentCollector().collect(item, FAST)
        assert snapshot.attachments == []
        assert "attachments" not in item.calls

    @pytest.mark.asyncio
    async def test_list_failure_yields_empty(self) -> None:
        item = _message(attachments=HostResult.failed("boom"))
        snapshot = await ContentCollector().collect(item, FAST)
        assert snapshot.attachments == []


class TestEncodeAttachmentData:
    """encode_attachment_data."""

    def test_base64_passthrough(self) -> None:
        assert encode_attachment_data(AttachmentContent("base64", "QUJD")) == "QUJD"

    def test_ascii_text_encoded(self) -> None:
        assert encode_attachment_data(AttachmentContent("url", "https://x")) == "aHR0cHM6Ly94"

    def test_non_ascii_text_rejected(self) -> None:
        assert encode_attachment_data(AttachmentContent("eml", "ção")) is None
