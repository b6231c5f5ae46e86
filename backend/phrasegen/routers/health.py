from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy.sql import text
from ..db import get_db

router = APIRouter(tags=["health"])

@router.get("/health")
def health(db: Session = Depends(get_db)):
	try:
		db.execute(text("SELECT 1"))
		database = "ok"
	except Exception as e:
		database = f"error: {e}"
	return {"status": "ok", "database": database}
