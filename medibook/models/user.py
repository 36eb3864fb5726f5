from sqlalchemy import Column, Integer, String, Date, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func

from ..core.database import Base
from ..core.security import UserRole


class User(Base):
    """Common account record. Concrete roles are mapped subclasses sharing this table."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole, name="user_role"), nullable=False, index=True)

    # Personal information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(11), nullable=False)
    nic = Column(String(13), nullable=False)
    dob = Column(Date, nullable=False)
    gender = Column(String(10), nullable=False)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"polymorphic_on": role}

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, email='{self.email}', role='{self.role}')>"


class Admin(User):
    __mapper_args__ = {"polymorphic_identity": UserRole.ADMIN}
