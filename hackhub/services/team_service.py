"""
Team Service
Team creation, membership and certificate recipient lookup
"""

import json
import uuid
from datetime import datetime, timezone
from typing import List

from hackhub.database import database
from hackhub.errors import ConflictError, NotFoundError, ValidationError
from hackhub.schemas.team import CreateTeamRequest
from hackhub.services.event_service import EventService


class TeamService:
    """Service for team operations"""

    @staticmethod
    async def _member_rows(team_ids: List[str]) -> dict:
        if not team_ids:
            return {}
        params = {f"team_{i}": team_id for i, team_id in enumerate(team_ids)}
        placeholders = ", ".join(f":{key}" for key in params)
        rows = await database.fetch_all(
            f"""
            SELECT tm.team_id, u.id, u.name, u.email
            FROM team_members tm
            JOIN users u ON u.id = tm.user_id
            WHERE tm.team_id IN ({placeholders})
            ORDER BY tm.joined_at
            """,
            params
        )
        members = {}
        for row in rows:
            row = dict(row._mapping)
            members.setdefault(row.pop("team_id"), []).append(row)
        return members

    @staticmethod
    async def _fetch_teams(where_clause: str, params: dict) -> List[dict]:
        rows = await database.fetch_all(
            f"""
            SELECT t.*, u.name AS leader_name, u.email AS leader_email
            FROM teams t
            LEFT JOIN users u ON u.id = t.leader_id
            WHERE {where_clause}
            ORDER BY t.created_at
            """,
            params
        )
        teams = []
        for row in rows:
            team = dict(row._mapping)
            leader_name = team.pop("leader_name")
            leader_email = team.pop("leader_email")
            team["tags"] = json.loads(team["tags"]) if isinstance(team["tags"], str) else (team["tags"] or [])
            team["leader"] = None
            if leader_name is not None:
                team["leader"] = {"id": team["leader_id"], "name": leader_name, "email": leader_email}
            teams.append(team)

        members = await TeamService._member_rows([team["id"] for team in teams])
        for team in teams:
            team["members"] = members.get(team["id"], [])
        return teams

    @staticmethod
    async def get_team(team_id: str) -> dict:
        teams = await TeamService._fetch_teams("t.id = :team_id", {"team_id": team_id})
        if not teams:
            raise NotFoundError("Team")
        return teams[0]

    @staticmethod
    async def list_teams(event_id: str) -> List[dict]:
        return await TeamService._fetch_teams("t.event_id = :event_id", {"event_id": event_id})

    @staticmethod
    async def _ensure_not_on_team(event_id: str, user_id: str) -> None:
        existing = await database.fetch_val(
            """
            SELECT COUNT(*) FROM teams t
            LEFT JOIN team_members tm ON tm.team_id = t.id
            WHERE t.event_id = :event_id AND (t.leader_id = :user_id OR tm.user_id = :user_id)
            """,
            {"event_id": event_id, "user_id": user_id}
        )
        if existing:
            raise ConflictError("You are already on a team for this event")

    @staticmethod
    async def create_team(data: CreateTeamRequest, actor: dict) -> dict:
        event = await EventService.get_event(data.event_id)
        if not event["modules"].get("teams"):
            raise ValidationError({"event_id": "Teams are disabled for this event"})

        await TeamService._ensure_not_on_team(data.event_id, actor["id"])

        team_id = str(uuid.uuid4())
        await database.execute(
            """
            INSERT INTO teams (id, event_id, leader_id, name, description, tags, max_members, created_at)
            VALUES (:id, :event_id, :leader_id, :name, :description, :tags, :max_members, :created_at)
            """,
            {
                "id": team_id,
                "event_id": data.event_id,
                "leader_id": actor["id"],
                "name": data.name,
                "description": data.description,
                "tags": json.dumps(data.tags),
                "max_members": data.max_members,
                "created_at": datetime.now(timezone.utc)
            }
        )
        return await TeamService.get_team(team_id)

    @staticmethod
    async def join_team(team_id: str, actor: dict) -> dict:
        """Add the actor to a team; the leader counts towards max_members"""
        team = await TeamService.get_team(team_id)
        await TeamService._ensure_not_on_team(team["event_id"], actor["id"])

        size = len(team["members"]) + (1 if team["leader_id"] else 0)
        if size >= team["max_members"]:
            raise ConflictError("Team is full")

        await database.execute(
            "INSERT INTO team_members (team_id, user_id, joined_at) VALUES (:team_id, :user_id, :joined_at)",
            {"team_id": team_id, "user_id": actor["id"], "joined_at": datetime.now(timezone.utc)}
        )
        return await TeamService.get_team(team_id)

    @staticmethod
    async def list_recipients(event_id: str) -> List[dict]:
        """
        Everyone eligible for a participation certificate for an event

        Leaders and members of every team, resolved to name and email.
        Unresolved users are skipped and each user appears once.
        """
        recipients = []
        seen = set()
        for team in await TeamService.list_teams(event_id):
            people = ([team["leader"]] if team["leader"] else []) + team["members"]
            for person in people:
                if person["id"] in seen:
                    continue
                seen.add(person["id"])
                recipients.append({"user_id": person["id"], "name": person["name"], "email": person["email"]})
        return recipients


# Create singleton instance
team_service = TeamService()
