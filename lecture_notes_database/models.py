from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# PUBLIC_INTERFACE
class User(Base):
    """
    SQLAlchemy model for an account. `password` always holds a hash.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(256), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)

# PUBLIC_INTERFACE
class Session(Base):
    """
    SQLAlchemy model for a login session; expires_at is a unix timestamp.
    """
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    token = Column(String(128), unique=True, index=True, nullable=False)
    expires_at = Column(Integer, nullable=False)

# PUBLIC_INTERFACE
class Section(Base):
    """
    SQLAlchemy model for a top level section. Positions are globally unique.
    """
    __tablename__ = "sections"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, unique=True)

# PUBLIC_INTERFACE
class Subsection(Base):
    """
    SQLAlchemy model for a subsection, ordered within its section.
    """
    __tablename__ = "subsections"
    __table_args__ = (UniqueConstraint("section_id", "position"),)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False)
    section_id = Column(Integer, ForeignKey("sections.id"), nullable=False)

# PUBLIC_INTERFACE
class Note(Base):
    """
    SQLAlchemy model for a lecture note link.

    A note may hang off a subsection, directly off a section, or off nothing.
    """
    __tablename__ = "notes"
    __table_args__ = (UniqueConstraint("subsection_id", "position"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
    position = Column(Integer, nullable=False)
    section_id = Column(Integer, ForeignKey("sections.id"), nullable=True)
    subsection_id = Column(Integer, ForeignKey("subsections.id"), nullable=True)
