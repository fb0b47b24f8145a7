from fastapi import APIRouter, Depends
from familytree.models.auth import LoginIn, TokenOut
from familytree.services.auth_service import login
from familytree.utils.deps import get_current_session

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])

@router.post("/login", response_model=TokenOut)
async def login_route(data: LoginIn):
    return {"access_token": login(data.password), "token_type": "bearer"}

@router.get("/session")
async def session_route(session: dict = Depends(get_current_session)):
    return {"subject": session.get("sub"), "expiresAt": session.get("exp")}
