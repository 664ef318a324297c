from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from trip_albums.db.database import Base


class PhotoAlbum(Base):
    __tablename__ = "photo_albums"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    cover_photo_id = Column(Integer, ForeignKey("photos.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    trip = relationship("Trip", back_populates="albums")
    photo_assignments = relationship(
        "PhotoAlbumAssignment",
        back_populates="album",
        cascade="all, delete-orphan",
        order_by="PhotoAlbumAssignment.sort_order",
    )

    def __repr__(self) -> str:
        return f"<PhotoAlbum(id={self.id}, name={self.name})>"


class PhotoAlbumAssignment(Base):
    __tablename__ = "photo_album_assignments"
    __table_args__ = (UniqueConstraint("album_id", "photo_id", name="uq_album_photo"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    album_id = Column(Integer, ForeignKey("photo_albums.id", ondelete="CASCADE"), nullable=False, index=True)
    photo_id = Column(Integer, ForeignKey("photos.id", ondelete="CASCADE"), nullable=False, index=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    album = relationship("PhotoAlbum", back_populates="photo_assignments")
    photo = relationship("Photo", back_populates="album_assignments")

    def __repr__(self) -> str:
        return f"<PhotoAlbumAssignment(album_id={self.album_id}, photo_id={self.photo_id}, sort_order={self.sort_order})>"
