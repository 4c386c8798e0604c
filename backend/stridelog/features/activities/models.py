"""
Activity models.

Models:
- Activity: Finished activity (type, distance, duration, comment)
- RoutePoint: One recorded coordinate, tagged with its segment index
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from stridelog.models.base import Base


class Activity(Base):
    """
    Finished activity.

    Points are owned exclusively by the activity and deleted with it.
    """

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)

    type = Column(String(50), nullable=False)
    distance = Column(Float, nullable=False, default=0.0)  # kilometers
    duration = Column(String(16), nullable=False, default="00:00:00")  # HH:MM:SS
    date = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    comment = Column(Text, nullable=False, default="", server_default="")

    # Nullable: rows from datasets that predate accounts have no owner
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)

    # Relationships
    points = relationship(
        "RoutePoint",
        back_populates="activity",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by=lambda: [RoutePoint.segment_index, RoutePoint.sequence, RoutePoint.id],
    )

    def __repr__(self):
        return f"<Activity {self.id} type={self.type} distance={self.distance:.2f}km>"


class RoutePoint(Base):
    """
    Route point.

    `segment_index` is the position of the segment inside the activity,
    `sequence` the position of the point inside the segment.
    """

    __tablename__ = "route_points"

    id = Column(Integer, primary_key=True, autoincrement=True)
    activity_id = Column(
        Integer,
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    segment_index = Column(Integer, nullable=False, default=0)
    sequence = Column(Integer, nullable=False, default=0)

    activity = relationship("Activity", back_populates="points")

    def __repr__(self):
        return f"<RoutePoint {self.segment_index}:{self.sequence} ({self.latitude}, {self.longitude})>"
