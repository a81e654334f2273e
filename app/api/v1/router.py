# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1 import (
    auth,
    users,
    centers,
    classrooms,
    children,
    attendance,
)

api_router = APIRouter()

api_router.include_router(auth.router,       prefix="/auth",       tags=["auth"])
api_router.include_router(users.router,      prefix="/users",      tags=["users"])
api_router.include_router(centers.router,    prefix="/centers",    tags=["centers"])
api_router.include_router(classrooms.router, prefix="/classrooms", tags=["classrooms"])
api_router.include_router(children.router,   prefix="/children",   tags=["children"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
