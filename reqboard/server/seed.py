"""Demo data loaded into a fresh store at startup.

One workspace with one board, three groups and a handful of requests owned
by four sample users.  Everything goes through the managers, so ranks are
assigned exactly as for API-created records.
"""

from __future__ import annotations

from loguru import logger

from reqboard.server.managers import boards, groups, requests, users, workspaces
from reqboard.server.models.api import (
    BoardCreate,
    GroupCreate,
    RequestCreate,
    UserCreate,
    WorkspaceCreate,
)
from reqboard.server.models.enums import Priority, RequestStatus
from reqboard.server.store.base import EntityStore

DEMO_USERS = [
    UserCreate(name="John Doe", email="john@example.com", initials="JD", color="#635BFF", avatar=""),
    UserCreate(name="Alice Miller", email="alice@example.com", initials="AM", color="#00CA72", avatar=""),
    UserCreate(name="Design Studio", email="design@example.com", initials="DS", color="#E2445C", avatar=""),
    UserCreate(name="Lisa Chen", email="lisa@example.com", initials="LC", color="#FF5A91", avatar=""),
]

DEMO_GROUPS = [
    GroupCreate(name="Incoming Requests", color="#3498db"),
    GroupCreate(name="In progress", color="#9b59b6"),
    GroupCreate(name="Completed", color="#27ae60"),
]


def seed_demo_data(store: EntityStore) -> None:
    """Populate ``store`` with the demo workspace."""
    user_ids = [users.create_user(store, body).id for body in DEMO_USERS]

    workspace = workspaces.create_workspace(
        store,
        WorkspaceCreate(name="Creative Channel", description="Main workspace for creative projects"),
    )
    board = boards.create_board(
        store,
        workspace.id,
        BoardCreate(name="Creative Channel", description="Main board for managing creative requests"),
    )
    incoming, _in_progress, completed = (groups.create_group(store, board.id, body) for body in DEMO_GROUPS)

    requests.create_request(
        store,
        incoming.id,
        RequestCreate(
            name="Creative 1",
            creative_brief="Landing page about working with us",
            type="Social Media",
            owner_id=user_ids[0],
            prediction="Low likelihood of success because: The concept needs more...",
        ),
    )
    requests.create_request(
        store,
        completed.id,
        RequestCreate(
            name="Creative 3",
            creative_brief="I need a flyer to send to our customers",
            status=RequestStatus.COMPLETED,
            priority=Priority.LOW,
            type="Document",
            owner_id=user_ids[1],
            assignee_id=user_ids[2],
            prediction="High likelihood of success",
        ),
    )
    requests.create_request(
        store,
        completed.id,
        RequestCreate(
            name="Creative 2",
            creative_brief="The campaign is going to be an email marketing...",
            status=RequestStatus.COMPLETED,
            type="Landing Page",
            owner_id=user_ids[0],
            assignee_id=user_ids[3],
            prediction="High likelihood of success",
        ),
    )
    logger.info("Demo data seeded (workspace={}, board={})", workspace.id, board.id)
