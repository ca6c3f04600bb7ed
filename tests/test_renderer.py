import asyncio

from PIL import Image

from hackhub.config import settings
from hackhub.services.certificate_renderer import (
    CertificateVariables,
    _hex_to_rgb,
    load_background,
    render,
    render_certificate,
    substitute,
)
from hackhub.services.certificate_service import artifact_filename


VARIABLES = CertificateVariables(
    recipient_name="Ada Lovelace",
    event_title="Spring Hack",
    role="participant",
    date="March 03, 2026",
)


def test_substitute_replaces_every_occurrence():
    text = "{{RECIPIENT_NAME}} / {{RECIPIENT_NAME}} at {{EVENT_TITLE}} ({{ROLE}}, {{DATE}})"
    assert substitute(text, VARIABLES) == (
        "Ada Lovelace / Ada Lovelace at Spring Hack (participant, March 03, 2026)"
    )


def test_substitute_missing_values_become_empty():
    assert substitute("[{{ROLE}}]", CertificateVariables(recipient_name="X")) == "[]"


def test_substitute_leaves_unknown_tokens():
    assert substitute("{{TEAM}}", VARIABLES) == "{{TEAM}}"


def test_fallback_layout_renders_pdf():
    pdf = render_certificate(None, VARIABLES)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_template_elements_render_pdf():
    template = {
        "elements": [
            {"content": "{{RECIPIENT_NAME}}", "x": 221, "y": 260, "fontSize": 36, "align": "center"},
            {"content": "{{EVENT_TITLE}}", "x": 221, "y": 320, "align": "right", "color": "#336699"},
            {"content": "{{DATE}}", "x": 40, "y": 520},
        ]
    }
    assert render_certificate(template, VARIABLES).startswith(b"%PDF")


def test_empty_elements_use_fallback():
    assert render_certificate({"elements": []}, VARIABLES).startswith(b"%PDF")


def test_unreachable_background_still_renders():
    template = {
        "background_url": "http://127.0.0.1:1/bg.png",
        "elements": [{"content": "{{RECIPIENT_NAME}}", "x": 100, "y": 100}],
    }
    pdf = asyncio.run(render(template, VARIABLES))
    assert pdf.startswith(b"%PDF")


def test_missing_local_background_is_skipped():
    assert asyncio.run(load_background("/backgrounds/missing.png")) is None
    assert asyncio.run(render({"background_url": "/backgrounds/missing.png"}, VARIABLES)).startswith(b"%PDF")


def test_local_background_outside_public_dir_is_ignored():
    assert asyncio.run(load_background("/../../etc/passwd")) is None


def test_local_background_is_loaded():
    settings.public_path.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (120, 80), "navy").save(settings.public_path / "bg.png")

    image = asyncio.run(load_background("/bg.png"))
    assert image is not None
    assert image.size == (120, 80)


def test_hex_to_rgb():
    assert _hex_to_rgb("#ff0000") == (255, 0, 0)
    assert _hex_to_rgb("0f0") == (0, 255, 0)
    assert _hex_to_rgb("not-a-color") == (0, 0, 0)


def test_artifact_filename_is_sanitized_and_unique():
    first = artifact_filename("Ada  Lovelace/../x")
    second = artifact_filename("Ada  Lovelace/../x")
    assert first.startswith("Ada_Lovelace")
    assert first.endswith(".pdf")
    assert "/" not in first
    assert first != second


def test_malformed_background_url_is_skipped():
    assert asyncio.run(load_background("http://[::1/bg.png")) is None
    template = {"background_url": "http://[::1/bg.png", "elements": [{"content": "{{RECIPIENT_NAME}}", "x": 10, "y": 10}]}
    assert asyncio.run(render(template, VARIABLES)).startswith(b"%PDF")


def test_remote_background_that_is_not_an_image_is_skipped(monkeypatch):
    class FakeResponse:
        content = b"<html>not an image</html>"

        def raise_for_status(self):
            return None

    class FakeClient:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return False

        async def get(self, url):
            return FakeResponse()

    monkeypatch.setattr("hackhub.services.certificate_renderer.httpx.AsyncClient", FakeClient)
    assert asyncio.run(load_background("https://cdn.hackhub.dev/bg.png")) is None


def test_unusable_local_background_names_are_skipped():
    assert asyncio.run(load_background("bg\x00.png")) is None
    assert asyncio.run(load_background("a" * 5000 + ".png")) is None


def test_corrupt_local_background_is_skipped():
    settings.public_path.mkdir(parents=True, exist_ok=True)
    (settings.public_path / "broken.png").write_bytes(b"not really a png")

    assert asyncio.run(load_background("/broken.png")) is None
