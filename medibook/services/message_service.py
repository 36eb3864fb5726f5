from sqlalchemy.orm import Session
from typing import List
import logging

from ..models.message import Message
from ..schemas.message import MessageCreate

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, db: Session):
        self.db = db

    def send(self, data: MessageCreate) -> Message:
        message = Message(**data.model_dump())
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        logger.info(f"Message {message.id} received from {message.email}")
        return message

    def list_all(self) -> List[Message]:
        return self.db.query(Message).order_by(Message.created_at.desc(), Message.id.desc()).all()
