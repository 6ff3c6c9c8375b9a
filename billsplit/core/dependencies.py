from fastapi import Request

from billsplit.core.config import Settings


async def get_app_settings(request: Request) -> Settings:
    # the settings create_app was built with, not a fresh read of the env
    return request.app.state.settings
