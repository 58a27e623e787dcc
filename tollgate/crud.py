from datetime import datetime
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from tollgate.models import VehicleEntry, User


async def find_open_entry_by_plate(db: AsyncSession, number_plate: str):
    result = await db.execute(
        select(VehicleEntry).where(VehicleEntry.number_plate == number_plate)
    )
    return result.scalars().first()


async def insert_entry(db: AsyncSession, number_plate: str, entry_interchange: str, entry_date_time: datetime):
    # A concurrent insert for the same plate surfaces here as an IntegrityError
    new_entry = VehicleEntry(
        number_plate=number_plate,
        entry_interchange=entry_interchange,
        entry_date_time=entry_date_time
    )
    db.add(new_entry)
    await db.flush()
    await db.refresh(new_entry)
    return new_entry


async def delete_entry(db: AsyncSession, entry_id: str):
    result = await db.execute(delete(VehicleEntry).where(VehicleEntry.id == entry_id))
    await db.flush()
    return result.rowcount


async def get_user_by_username(db: AsyncSession, username: str):
    result = await db.execute(select(User).where(User.username == username))
    return result.scalars().first()


async def create_user(db: AsyncSession, username: str, password_hash: str, interchange: str):
    new_user = User(username=username, password=password_hash, interchange=interchange)
    db.add(new_user)
    await db.flush()
    await db.refresh(new_user)
    return new_user
