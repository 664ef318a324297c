from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from trip_albums.db.database import Base


class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    filename = Column(String, nullable=True)
    caption = Column(Text, nullable=True)

    # EXIF derived, any of these may be missing
    taken_at = Column(DateTime(timezone=True), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    trip = relationship("Trip", back_populates="photos")
    album_assignments = relationship(
        "PhotoAlbumAssignment", back_populates="photo", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, trip_id={self.trip_id}, taken_at={self.taken_at})>"
