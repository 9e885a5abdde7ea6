from pydantic import BaseModel


class ActionState(BaseModel):
    """Body returned to the form layer when an action does not redirect."""

    ok: bool
    message: str | None = None
    request_id: str | None = None
