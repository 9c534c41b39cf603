"""
Purpose:
- Expose the static era/scene catalog for the browser front end.
"""

from typing import List
from fastapi import APIRouter
from ..catalog.eras import ERAS
from ..catalog.schema import Era

router = APIRouter(prefix="/api", tags=["scenes"])

@router.get("/scenes", response_model=List[Era])
def list_scenes():
    return list(ERAS)
