"""
Team Routes
Team creation and membership
"""

from fastapi import APIRouter, Depends, Query, status

from hackhub.auth import get_current_user
from hackhub.schemas.team import CreateTeamRequest, TeamListResponse, TeamResponse
from hackhub.services.team_service import team_service

router = APIRouter()


@router.post("", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
async def create_team(
    request: CreateTeamRequest,
    current_user: dict = Depends(get_current_user)
):
    """Create a team for an event; the caller becomes its leader"""
    return await team_service.create_team(request, current_user)


@router.get("", response_model=TeamListResponse)
async def list_teams(event_id: str = Query(..., min_length=1)):
    teams = await team_service.list_teams(event_id)
    return {"total": len(teams), "teams": teams}


@router.post("/{team_id}/join", response_model=TeamResponse)
async def join_team(
    team_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Join a team that still has room"""
    return await team_service.join_team(team_id, current_user)
