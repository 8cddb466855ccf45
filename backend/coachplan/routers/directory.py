# backend/coachplan/routers/directory.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coachplan.db import get_db
from coachplan.schemas.directory import CoachOut, GroupOut
from coachplan.stores.directory import CoachDirectory, GroupDirectory

router = APIRouter(tags=["directory"])


@router.get("/groups", response_model=List[GroupOut])
def list_groups(db: Session = Depends(get_db)):
    return GroupDirectory(db).list_groups()


@router.get("/coaches", response_model=List[CoachOut])
def list_coaches(db: Session = Depends(get_db)):
    return CoachDirectory(db).list_coaches()
