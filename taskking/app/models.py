from sqlalchemy import Boolean, Column, String, Text

from .db import Base


class TaskRecord(Base):
    __tablename__ = "tasks"

    id = Column(String(24), primary_key=True, index=True)
    title = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    priority = Column(String(16), nullable=False, default="Low")
    completed = Column(Boolean, nullable=False, default=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "completed": bool(self.completed),
        }
