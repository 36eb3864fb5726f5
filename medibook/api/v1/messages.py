from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...api.deps import get_admin_user
from ...services.message_service import MessageService
from ...schemas.message import MessageCreate, MessageListResponse, MessageResponse
from ...schemas.common import StatusResponse
from ...models.user import User

router = APIRouter(prefix="/message", tags=["Messages"])


@router.post("/send", response_model=StatusResponse)
async def send_message(
    message_data: MessageCreate,
    db: Session = Depends(get_db)
):
    """Contact form submission (public)."""
    MessageService(db).send(message_data)
    return StatusResponse(message="Message sent successfully")


@router.get("/getall", response_model=MessageListResponse)
async def get_all_messages(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_admin_user)
):
    messages = MessageService(db).list_all()
    return MessageListResponse(messages=[MessageResponse.model_validate(m) for m in messages])
