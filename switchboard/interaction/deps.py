"""FastAPI dependencies specific to the interaction service.

Database, token and caller dependencies are shared with the registry and
live in ``switchboard.shared.deps``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from switchboard.interaction.managers.interactions import InteractionManager


def get_interaction_manager(request: Request) -> InteractionManager:
    return request.app.state.interaction_manager


InteractionMgr = Annotated[InteractionManager, Depends(get_interaction_manager)]
"""Annotated dependency: the process-wide InteractionManager."""
