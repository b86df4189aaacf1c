from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse
from app.modules.tasks.service import TaskService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_supabase)) -> TaskService:
    return TaskService(supabase)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    task_data: TaskCreate,
    user_data: Dict = Depends(require_permission("tasks:create")),
    service: TaskService = Depends(get_task_service)
):
    """Create a new task"""
    return service.create_task(task_data)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    status: str = "all",
    salesperson_id: Optional[str] = None,
    limit: int = 200,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("tasks:read")),
    service: TaskService = Depends(get_task_service)
):
    """List tasks; status is all, pending or completed"""
    return service.list_tasks(status=status, salesperson_id=salesperson_id, limit=limit, offset=offset)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    user_data: Dict = Depends(require_permission("tasks:read")),
    service: TaskService = Depends(get_task_service)
):
    """Get task by ID"""
    return service.get_task_by_id(task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    user_data: Dict = Depends(require_permission("tasks:update")),
    service: TaskService = Depends(get_task_service)
):
    """Update task"""
    return service.update_task(task_id, task_data)


@router.post("/{task_id}/toggle-complete", response_model=TaskResponse)
async def toggle_task(
    task_id: str,
    user_data: Dict = Depends(require_permission("tasks:update")),
    service: TaskService = Depends(get_task_service)
):
    """Mark a task completed, or reopen it"""
    return service.toggle_completed(task_id)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    user_data: Dict = Depends(require_permission("tasks:delete")),
    service: TaskService = Depends(get_task_service)
):
    """Delete task"""
    service.delete_task(task_id)
    return None
