from hackhub.config import settings


def generate(client, user, event_id, **overrides):
    payload = {"eventId": event_id, "recipientName": "Grace Hopper", "recipientEmail": "grace@hackhub.dev"}
    payload.update(overrides)
    return client.post("/api/certificates", json=payload, headers=user["headers"])


def artifact_path(certificate):
    return settings.certificates_path / certificate["certificate_url"].rsplit("/", 1)[-1]


def test_generate_writes_artifact_then_record(client, make_user, make_event):
    organizer = make_user("organizer")
    event = make_event(organizer)

    resp = generate(client, organizer, event["id"], role="mentor")
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    certificate = body["certificate"]
    assert certificate["recipient_name"] == "Grace Hopper"
    assert certificate["role"] == "mentor"
    assert certificate["certificate_url"].startswith("/certificates/")
    assert certificate["certificate_id"].startswith("CERT-")

    path = artifact_path(certificate)
    assert path.is_file()
    assert path.read_bytes().startswith(b"%PDF")

    served = client.get(certificate["certificate_url"])
    assert served.status_code == 200
    assert served.content.startswith(b"%PDF")


def test_generate_defaults_role_to_participant(client, make_user, make_event):
    admin = make_user("admin")
    event = make_event(admin)
    assert generate(client, admin, event["id"]).json()["certificate"]["role"] == "participant"


def test_generate_requires_recipient_name(client, make_user, make_event):
    organizer = make_user("organizer")
    event = make_event(organizer)

    resp = generate(client, organizer, event["id"], recipientName="   ")
    assert resp.status_code == 400
    assert "recipient_name" in resp.json()["detail"]["details"]
    assert list(settings.certificates_path.iterdir()) == []


def test_generate_requires_event(client, make_user):
    organizer = make_user("organizer")
    resp = client.post("/api/certificates", json={"recipientName": "Grace"}, headers=organizer["headers"])
    assert resp.status_code == 400
    assert "event_id" in resp.json()["detail"]["details"]


def test_generate_for_unknown_event_is_404(client, make_user):
    organizer = make_user("organizer")
    assert generate(client, organizer, "missing-event").status_code == 404


def test_generate_rejects_other_organizer(client, make_user, make_event):
    owner = make_user("organizer")
    intruder = make_user("organizer")
    event = make_event(owner)

    resp = generate(client, intruder, event["id"])
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Unauthorized"
    assert list(settings.certificates_path.iterdir()) == []


def test_generate_rejects_participant(client, make_user, make_event):
    organizer = make_user("organizer")
    participant = make_user("participant")
    event = make_event(organizer)
    assert generate(client, participant, event["id"]).status_code == 403


def test_generate_with_template_and_unreachable_background(client, make_user, make_event):
    organizer = make_user("organizer")
    event = make_event(
        organizer,
        certificateTemplate={
            "backgroundUrl": "http://127.0.0.1:1/bg.png",
            "elements": [
                {"content": "{{RECIPIENT_NAME}}", "x": 221, "y": 260, "fontSize": 36, "align": "center"},
                {"content": "{{ROLE}} at {{EVENT_TITLE}}", "x": 221, "y": 320, "align": "center"},
            ],
        },
    )

    resp = generate(client, organizer, event["id"])
    assert resp.status_code == 201
    assert artifact_path(resp.json()["certificate"]).is_file()


def test_list_event_certificates(client, make_user, make_event):
    organizer = make_user("organizer")
    event = make_event(organizer)
    generate(client, organizer, event["id"], recipientName="One")
    generate(client, organizer, event["id"], recipientName="Two")

    resp = client.get("/api/certificates", params={"event_id": event["id"]}, headers=organizer["headers"])
    assert resp.status_code == 200
    assert resp.json()["total"] == 2


def test_verify_is_public(client, make_user, make_event):
    organizer = make_user("organizer")
    event = make_event(organizer, title="Verify Hack")
    certificate = generate(client, organizer, event["id"]).json()["certificate"]

    resp = client.get(f"/api/certificates/verify/{certificate['certificate_id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert body["event_title"] == "Verify Hack"
    assert body["recipient_name"] == "Grace Hopper"

    assert client.get("/api/certificates/verify/CERT-NOPE").status_code == 404


def test_my_certificates_match_email(client, make_user, make_event):
    organizer = make_user("organizer")
    participant = make_user("participant", email="grace@hackhub.dev")
    event = make_event(organizer)
    generate(client, organizer, event["id"])
    generate(client, organizer, event["id"], recipientName="Someone Else", recipientEmail="else@hackhub.dev")

    resp = client.get("/api/certificates/mine", headers=participant["headers"])
    assert resp.json()["total"] == 1
    assert resp.json()["certificates"][0]["recipient_email"] == "grace@hackhub.dev"


def test_render_failure_records_nothing(client, make_user, make_event, monkeypatch):
    organizer = make_user("organizer")
    event = make_event(organizer)

    async def broken_render(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("hackhub.services.certificate_service.render", broken_render)

    resp = generate(client, organizer, event["id"])
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Certificate generation failed"

    listing = client.get("/api/certificates", params={"event_id": event["id"]}, headers=organizer["headers"])
    assert listing.json()["total"] == 0


def test_generate_with_malformed_background_url(client, make_user, make_event):
    organizer = make_user("organizer")
    event = make_event(
        organizer,
        certificateTemplate={
            "backgroundUrl": "http://[::1/bg.png",
            "elements": [{"content": "{{RECIPIENT_NAME}}", "x": 221, "y": 260}],
        },
    )

    resp = generate(client, organizer, event["id"])
    assert resp.status_code == 201
    assert artifact_path(resp.json()["certificate"]).is_file()
