"""
Authorization Gate
Decides whether a page request is allowed, denied or redirected
"""

from dataclasses import dataclass
from typing import Optional

from hackhub.auth.roles import Role

PUBLIC_ROUTES = frozenset({"/", "/login", "/register", "/events", "/verify", "/profile"})

DASHBOARD_ROUTES = {
    "/admin": Role.ADMIN,
    "/organizer": Role.ORGANIZER,
    "/judge": Role.JUDGE,
    "/mentor": Role.MENTOR,
    "/participant": Role.PARTICIPANT,
}

ALLOW = "allow"
DENY = "deny"
REDIRECT = "redirect"


@dataclass(frozen=True)
class Decision:
    outcome: str
    target: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome == ALLOW


def _matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def required_role(path: str) -> Optional[Role]:
    """Role owning the dashboard section `path` falls under, if any"""
    for prefix, role in DASHBOARD_ROUTES.items():
        if _matches_prefix(path, prefix):
            return role
    return None


def authorize(path: str, session: Optional[dict]) -> Decision:
    """
    Authorize a page request

    Args:
        path: Request path
        session: Decoded session (token payload) or None when logged out

    Returns:
        Decision to allow, deny, or redirect to the actor's own dashboard
    """
    if path in PUBLIC_ROUTES:
        return Decision(ALLOW)

    if not session:
        return Decision(DENY)

    role = required_role(path)
    if role is None:
        return Decision(ALLOW)

    actor_role = Role.parse(session.get("role"))
    if actor_role == role:
        return Decision(ALLOW)

    target = actor_role.dashboard_path
    if path == target:
        return Decision(ALLOW)

    return Decision(REDIRECT, target)
