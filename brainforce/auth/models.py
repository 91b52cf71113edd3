from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from brainforce.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Always stored lower-cased
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, nullable=False)

    password_hash = Column(String, nullable=False)

    firstname = Column(String, nullable=False, default="")
    lastname = Column(String, nullable=False, default="")

    # URL or blob key
    photo = Column(String, nullable=True)

    points = Column(Integer, nullable=False, default=0, server_default="0")
    totalquiz = Column(Integer, nullable=False, default=0, server_default="0")

    created = Column(DateTime(timezone=True), server_default=func.now())
