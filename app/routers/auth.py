import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin
from app.schemas.tokens import Token
from app.utils.persistence import commit_or_500
from app.utils.security import hash_password, verify_password, create_access_token

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/signup", response_model=Token)
def signup(user: UserCreate, db: Session = Depends(get_db)):
    existing_user = db.query(User).filter(User.email == user.email).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = User(
        name=user.name,
        email=user.email,
        hashed_password=hash_password(user.password),
        avatar_url=user.avatar_url,
        role="user",
    )

    db.add(new_user)
    commit_or_500(db, "Failed to create account")
    db.refresh(new_user)
    logger.info("New account created for %s", new_user.email)

    token = create_access_token(data={"sub": new_user.email})
    return {"access_token": token, "token_type": "bearer", "user": new_user}

@router.post("/login", response_model=Token)
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == user.email).first()
    if not db_user or not verify_password(user.password, db_user.hashed_password):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    if not db_user.is_active:
        raise HTTPException(status_code=401, detail="Account has been deactivated. Please contact administrator.")

    token = create_access_token(data={"sub": db_user.email})
    return {"access_token": token, "token_type": "bearer", "user": db_user}
