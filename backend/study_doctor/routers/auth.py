from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from sqlalchemy.orm import Session
import logging

from ..settings import Settings, get_settings
from ..db import get_db
from ..models import User as UserRow

router = APIRouter(prefix="/api", tags=["auth"])

logger = logging.getLogger(__name__)
logging.getLogger('passlib').setLevel(logging.ERROR)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


class User(BaseModel):
	id: int
	username: str
	email: str


class RegisterRequest(BaseModel):
	username: str = ""
	email: str = ""
	password: str = ""


class LoginRequest(BaseModel):
	email: str = ""
	password: str = ""


class LoginResponse(BaseModel):
	token: str
	username: str
	email: str


def _bcrypt_safe(password: str) -> str:
	# bcrypt only looks at the first 72 bytes
	password_bytes = password.encode('utf-8')
	if len(password_bytes) > 72:
		password_bytes = password_bytes[:72]
	return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
	return pwd_context.hash(_bcrypt_safe(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
	return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
	to_encode = data.copy()
	delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
	to_encode.update({"exp": datetime.now(timezone.utc) + delta})
	return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@router.post("/register", status_code=201)
async def register(req: RegisterRequest, db: Session = Depends(get_db)):
	username = (req.username or "").strip()
	email = (req.email or "").strip().lower()
	password = req.password or ""
	if not username or not email or not password:
		raise HTTPException(status_code=400, detail="username, email and password are required")
	existing = db.query(UserRow).filter(UserRow.email == email).first()
	if existing:
		raise HTTPException(status_code=400, detail="User already exists")
	row = UserRow(username=username, email=email, password_hash=hash_password(password))
	db.add(row)
	db.commit()
	logger.info("Registered user %s", email)
	return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
	email = (req.email or "").strip().lower()
	row = db.query(UserRow).filter(UserRow.email == email).first()
	if not row or not verify_password(req.password or "", row.password_hash):
		raise HTTPException(status_code=400, detail="Invalid credentials")
	token = create_access_token({"sub": str(row.id)}, settings)
	return LoginResponse(token=token, username=row.username, email=row.email)


def get_current_user(
	credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
) -> User:
	if credentials is None or not credentials.credentials:
		raise HTTPException(status_code=401, detail="Unauthorized: Access token is missing")
	forbidden = HTTPException(status_code=403, detail="Forbidden: Invalid or expired token")
	try:
		payload = jwt.decode(credentials.credentials, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
		user_id = int(payload.get("sub"))
	except (JWTError, TypeError, ValueError):
		raise forbidden
	row = db.get(UserRow, user_id)
	if row is None:
		raise forbidden
	return User(id=row.id, username=row.username, email=row.email)


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
	return user
