from typing import Annotated

from fastapi import Depends, Request

from mongolink.core.connection import ConnectionManager


def get_connection_manager(request: Request) -> ConnectionManager:
    return request.app.state.connection_manager


ConnectionManagerDep = Annotated[ConnectionManager, Depends(get_connection_manager)]
