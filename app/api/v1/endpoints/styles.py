from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.models.models import Style
from app.schemas.style import StyleCreate, StyleRead, tech_pack_to_document
from app.services.style_lookup import fetch_style_by_reference


router = APIRouter()


@router.get("/by-reference", response_model=StyleRead)
def get_style_by_reference(ref: str, db: Session = Depends(get_db)):
    style = fetch_style_by_reference(db, ref)
    if style is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Style not found")
    return style


@router.get("/{id}", response_model=StyleRead)
def get_style(id: int, db: Session = Depends(get_db)):
    style = db.query(Style).filter(Style.id == id).first()
    if style is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Style not found")
    return style


@router.post("/", response_model=StyleRead, status_code=status.HTTP_201_CREATED)
def create_style(data: StyleCreate, db: Session = Depends(get_db)):
    existing = db.query(Style).filter(Style.style_number == data.style_number).first()
    if existing is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Style number already exists")

    style = Style(
        style_number=data.style_number,
        style_text=data.style_text,
        category=data.category,
        size_type=data.size_type,
        tech_pack=tech_pack_to_document(data.tech_pack),
    )
    db.add(style)
    db.commit()
    db.refresh(style)
    return style


@router.put("/{id}", response_model=StyleRead)
def update_style(id: int, data: StyleCreate, db: Session = Depends(get_db)):
    style = db.query(Style).filter(Style.id == id).first()
    if style is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Style not found")

    if data.style_number != style.style_number:
        existing = db.query(Style).filter(Style.style_number == data.style_number, Style.id != id).first()
        if existing is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Style number already exists")

    style.style_number = data.style_number
    style.style_text = data.style_text
    style.category = data.category
    style.size_type = data.size_type
    style.tech_pack = tech_pack_to_document(data.tech_pack)
    db.commit()
    db.refresh(style)
    return style
