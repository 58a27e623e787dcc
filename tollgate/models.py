import uuid
from sqlalchemy import Column, String, DateTime
from tollgate.database import Base


def generate_id():
    return str(uuid.uuid4())


class VehicleEntry(Base):
    __tablename__ = "vehicle_entries"

    id = Column(String(36), primary_key=True, default=generate_id)
    # Unique: one open entry per plate
    number_plate = Column(String(7), nullable=False, unique=True)
    entry_interchange = Column(String(64), nullable=False)
    entry_date_time = Column(DateTime(timezone=True), nullable=False)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    interchange = Column(String(64), nullable=False)
