"""
Adapter tests that run without network access or an ffmpeg binary.
"""

import asyncio
import subprocess
from types import SimpleNamespace

import pytest

from docintro.adapters.external.caption_overlay_ffmpeg import FfmpegCaptionRenderer
from docintro.adapters.external.email_service_sendgrid import SendGridEmailService
from docintro.adapters.storage.azure_blob_service import AzureVideoHostingService
from docintro.core.config import AzureBlobSettings, SendGridSettings
from docintro.core.exceptions import EmailDeliveryError, VideoProcessingError


class StubSendGridClient:
    def __init__(self, status_code=202):
        self.status_code = status_code
        self.messages = []

    def send(self, message):
        self.messages.append(message)
        return SimpleNamespace(status_code=self.status_code)


def test_sendgrid_not_configured_without_key():
    service = SendGridEmailService(SendGridSettings(api_key=""))

    assert service.is_configured is False
    with pytest.raises(EmailDeliveryError):
        asyncio.run(service.send_email("a@x.com", "s", "t"))


def test_sendgrid_sends_plain_text_message():
    client = StubSendGridClient()
    service = SendGridEmailService(SendGridSettings(from_email="team@docintro.test"), client=client)

    asyncio.run(service.send_email("a@x.com", "Record Your Introduction Video", "Click the link"))

    payload = client.messages[0].get()
    assert payload["from"]["email"] == "team@docintro.test"
    assert payload["personalizations"][0]["to"][0]["email"] == "a@x.com"
    assert payload["subject"] == "Record Your Introduction Video"
    assert payload["content"][0] == {"type": "text/plain", "value": "Click the link"}


def test_sendgrid_error_status_raises():
    service = SendGridEmailService(SendGridSettings(), client=StubSendGridClient(status_code=500))

    with pytest.raises(EmailDeliveryError):
        asyncio.run(service.send_email("a@x.com", "s", "t"))


def test_caption_command_uses_drawtext(tmp_path):
    renderer = FfmpegCaptionRenderer(ffmpeg_path="/usr/bin/ffmpeg")
    source = tmp_path / "final_video.webm"

    cmd = renderer.build_command(source, tmp_path / "caption.txt", tmp_path / "out.webm")

    assert cmd[0] == "/usr/bin/ffmpeg"
    assert cmd[cmd.index("-i") + 1] == str(source)
    drawtext = cmd[cmd.index("-vf") + 1]
    assert drawtext.startswith(f"drawtext=textfile='{(tmp_path / 'caption.txt').as_posix()}'")
    assert "x=(w-text_w)/2" in drawtext


def test_caption_ffmpeg_failure_raises(tmp_path, monkeypatch):
    source = tmp_path / "final_video.webm"
    source.write_bytes(b"video")
    calls = []

    def fake_run(cmd, capture_output, text):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Invalid data found")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(VideoProcessingError) as exc_info:
        asyncio.run(FfmpegCaptionRenderer().render_caption(source, "Dr. Alice"))

    assert exc_info.value.details["stderr"] == "Invalid data found"
    assert len(calls) == 1
    assert not (tmp_path / "final_video_captioned.webm").exists()


def test_caption_missing_binary_raises(tmp_path):
    source = tmp_path / "final_video.webm"
    source.write_bytes(b"video")
    renderer = FfmpegCaptionRenderer(ffmpeg_path=str(tmp_path / "no-such-ffmpeg"))

    with pytest.raises(VideoProcessingError):
        asyncio.run(renderer.render_caption(source, "Dr. Alice"))


def test_blob_path_and_signed_url():
    service = AzureVideoHostingService(
        AzureBlobSettings(
            connection_string=(
                "DefaultEndpointsProtocol=https;AccountName=docintro;"
                "AccountKey=c2VjcmV0;EndpointSuffix=core.windows.net"
            ),
            container_name="doctor-videos",
        )
    )

    assert service.blob_path("abc") == "videos/abc.webm"
    url = service.generate_signed_url("videos/abc.webm", expires_in_hours=1)
    assert url.startswith("https://docintro.blob.core.windows.net/doctor-videos/videos/abc.webm?")
    assert "sig=" in url
