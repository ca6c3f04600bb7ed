def create_team(client, user, event_id, **overrides):
    payload = {"eventId": event_id, "name": "Night Owls", "tags": ["ai"]}
    payload.update(overrides)
    return client.post("/api/teams", json=payload, headers=user["headers"])


def test_creator_leads_the_team(client, make_user, make_event):
    organizer = make_user("organizer")
    leader = make_user("participant")
    event = make_event(organizer)

    resp = create_team(client, leader, event["id"])
    assert resp.status_code == 201
    team = resp.json()
    assert team["leader"]["id"] == leader["id"]
    assert team["members"] == []
    assert team["tags"] == ["ai"]


def test_join_and_list(client, make_user, make_event):
    organizer = make_user("organizer")
    leader = make_user("participant")
    member = make_user("participant")
    event = make_event(organizer)
    team = create_team(client, leader, event["id"]).json()

    resp = client.post(f"/api/teams/{team['id']}/join", headers=member["headers"])
    assert resp.status_code == 200
    assert [m["id"] for m in resp.json()["members"]] == [member["id"]]

    listing = client.get("/api/teams", params={"event_id": event["id"]}).json()
    assert listing["total"] == 1


def test_one_team_per_event(client, make_user, make_event):
    organizer = make_user("organizer")
    leader = make_user("participant")
    event = make_event(organizer)
    team = create_team(client, leader, event["id"]).json()

    assert create_team(client, leader, event["id"], name="Second").status_code == 409
    assert client.post(f"/api/teams/{team['id']}/join", headers=leader["headers"]).status_code == 409


def test_full_team_rejects_joins(client, make_user, make_event):
    organizer = make_user("organizer")
    leader = make_user("participant")
    event = make_event(organizer)
    team = create_team(client, leader, event["id"], maxMembers=2).json()

    assert client.post(f"/api/teams/{team['id']}/join", headers=make_user()["headers"]).status_code == 200
    resp = client.post(f"/api/teams/{team['id']}/join", headers=make_user()["headers"])
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Team is full"


def test_teams_module_disabled(client, make_user, make_event):
    organizer = make_user("organizer")
    event = make_event(organizer, modules={"judging": True, "certificates": True, "gallery": True, "teams": False})

    resp = create_team(client, make_user(), event["id"])
    assert resp.status_code == 400


def test_join_unknown_team_is_404(client, make_user):
    assert client.post("/api/teams/nope/join", headers=make_user()["headers"]).status_code == 404
