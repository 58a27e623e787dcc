import uvicorn
import os
import logging
from typing import Optional
from fastapi import FastAPI, APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from tollgate.database import init_db, get_db
from tollgate.config import INTERCHANGES
from tollgate.errors import TollGateError
from tollgate.lifecycle import record_entry, record_exit
from tollgate.crud import get_user_by_username, create_user
from tollgate.auth import (
    TOKEN_COOKIE,
    TOKEN_TTL_SECONDS,
    create_access_token,
    hash_password,
    home_interchange,
    verify_password,
)
from tollgate.schemas import (
    VehicleMovementRequest,
    VehicleEntryOut,
    VehicleEntryResponse,
    TollBreakdownResponse,
    InterchangeOut,
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)

logging.basicConfig(level=logging.INFO)

app = FastAPI(
    title="Toll Gate Service",
    version="1.0.0"
)

# Environment variables
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
SECURE_COOKIES = os.getenv("ENVIRONMENT", "development").lower() == "production"

toll_router = APIRouter()
auth_router = APIRouter()


@app.on_event("startup")
async def on_startup():
    await init_db()
    logging.info(f"Available Interchanges: {', '.join(INTERCHANGES)}")


@app.get("/health")
async def health():
    return {"status": "ok"}


@toll_router.get("/interchanges", response_model=list[InterchangeOut])
async def list_interchanges():
    return [InterchangeOut(name=name, distance=distance) for name, distance in INTERCHANGES.items()]


@toll_router.post("/entry", response_model=VehicleEntryResponse, status_code=HTTP_201_CREATED)
async def vehicle_entry(
    payload: VehicleMovementRequest,
    station: Optional[str] = Depends(home_interchange),
    db: AsyncSession = Depends(get_db)
):
    try:
        new_entry = await record_entry(
            db,
            payload.number_plate,
            interchange=payload.interchange,
            home_interchange=station,
            date_time=payload.date_time
        )
    except TollGateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return VehicleEntryResponse(
        message="Vehicle entry recorded successfully.",
        entry=VehicleEntryOut.model_validate(new_entry)
    )


@toll_router.post("/exit", response_model=TollBreakdownResponse)
async def vehicle_exit(
    payload: VehicleMovementRequest,
    station: Optional[str] = Depends(home_interchange),
    db: AsyncSession = Depends(get_db)
):
    try:
        breakdown = await record_exit(
            db,
            payload.number_plate,
            interchange=payload.interchange,
            home_interchange=station,
            date_time=payload.date_time
        )
    except TollGateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return TollBreakdownResponse(
        base_rate=breakdown.base_rate,
        distance_cost=breakdown.distance_cost,
        distance_breakdown=breakdown.distance_breakdown,
        sub_total=breakdown.sub_total,
        discount=breakdown.discount,
        total_charged=breakdown.total_charged,
        message="Toll calculated successfully."
    )


@auth_router.post("/register", response_model=MessageResponse, status_code=HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)):
    if not payload.username or not payload.password or not payload.interchange:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Username, password and interchange are required.")
    if payload.interchange not in INTERCHANGES:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=f"Invalid interchange: {payload.interchange}")

    try:
        await create_user(db, payload.username, hash_password(payload.password), payload.interchange)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=HTTP_409_CONFLICT, detail="Username already exists.")
    except SQLAlchemyError as e:
        logging.error(f"Registration failed for {payload.username}: {e}")
        raise HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Internal server error: {e}")

    logging.info(f"User registered: {payload.username} ({payload.interchange})")
    return MessageResponse(message="User registered successfully.")


@auth_router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    if not payload.username or not payload.password:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Username and password are required.")
    if payload.interchange and payload.interchange not in INTERCHANGES:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=f"Invalid interchange: {payload.interchange}")

    try:
        user = await get_user_by_username(db, payload.username)
    except SQLAlchemyError as e:
        logging.error(f"Login lookup failed for {payload.username}: {e}")
        raise HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Internal server error: {e}")

    if not user or not verify_password(payload.password, user.password):
        logging.warning(f"Failed login for {payload.username}")
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid username or password.")

    final_interchange = payload.interchange or user.interchange
    token = create_access_token(user.username, final_interchange)
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=SECURE_COOKIES,
        samesite="strict",
        max_age=TOKEN_TTL_SECONDS
    )

    logging.info(f"User {user.username} logged in at {final_interchange}")
    return LoginResponse(message="Login successful", interchange=final_interchange, access_token=token)


app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(toll_router, prefix="/api", tags=["Toll"])

if __name__ == "__main__":
    uvicorn.run("tollgate.main:app", host=HOST, port=PORT, reload=True)
