"""
Todo API endpoints - quick follow-ups shown next to the asset table
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import Any, List, Optional
from pydantic import BaseModel

from asset_manager.database import get_db
from asset_manager.models.todo import TodoItem
from asset_manager.utils.validators import blank_to_none, parse_int_id

router = APIRouter()


# --- Pydantic Schemas ---

class TodoResponse(BaseModel):
    id: int
    text: str
    done: bool
    note: Optional[str]

    class Config:
        from_attributes = True


class TodoCreate(BaseModel):
    text: Any = None
    note: Optional[str] = None


class TodoPatch(BaseModel):
    done: Any = None
    note: Optional[str] = None


# --- Helpers ---

def _todo_id(raw: str) -> int:
    try:
        return parse_int_id(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid todo id")


# --- Endpoints ---

@router.get("", response_model=List[TodoResponse])
async def list_todos(db: AsyncSession = Depends(get_db)):
    """List todos, newest first"""
    result = await db.execute(
        select(TodoItem.id, TodoItem.text, TodoItem.done, TodoItem.note)
        .order_by(TodoItem.created_at.desc(), TodoItem.id.desc())
    )
    return [TodoResponse(**row) for row in result.mappings().all()]


@router.post("", response_model=TodoResponse, status_code=201)
async def create_todo(data: TodoCreate, db: AsyncSession = Depends(get_db)):
    """Create a new todo"""
    if not isinstance(data.text, str) or not data.text.strip():
        raise HTTPException(status_code=400, detail="Todo text is required")

    todo = TodoItem(text=data.text.strip(), note=blank_to_none(data.note), done=False)
    db.add(todo)
    await db.commit()
    await db.refresh(todo)
    return todo


@router.patch("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    data: Optional[TodoPatch] = None,
    db: AsyncSession = Depends(get_db),
):
    """Set the done flag and note of a todo; a missing body means done=False, note=None"""
    todo_pk = _todo_id(todo_id)
    data = data or TodoPatch()
    result = await db.execute(select(TodoItem).where(TodoItem.id == todo_pk))
    todo = result.scalar_one_or_none()
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")

    todo.done = bool(data.done)
    todo.note = blank_to_none(data.note)
    await db.commit()
    await db.refresh(todo)
    return todo


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(todo_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a todo"""
    todo_pk = _todo_id(todo_id)
    result = await db.execute(delete(TodoItem).where(TodoItem.id == todo_pk))
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="Todo not found")
    await db.commit()
    return Response(status_code=204)
