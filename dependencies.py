# dependencies.py
"""
Shared FastAPI dependencies.

Tokens are issued elsewhere; this service only checks the signature and
reads the user id from the `id` claim.
"""
from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt

from config import JWT_SECRET, JWT_ALGORITHM


def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def get_current_user_id(token: dict = Depends(verify_token)) -> int:
     """The authenticated user's id, attached to every row they write."""
     user_id = token.get("id")
     if user_id is None:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
     try:
          return int(user_id)
     except (TypeError, ValueError):
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
